class StorageError(Exception):
    """Repository failure. Propagated unmodified to the caller."""

from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from src.app.errors import StorageError


@asynccontextmanager
async def storage_errors():
    """Re-raise driver/ORM failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(str(exc)) from exc

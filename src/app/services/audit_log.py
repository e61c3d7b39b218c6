"""
Audit Log

Best-effort writer for the append-only audit trail.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, AuditResource

logger = logging.getLogger(__name__)


class AuditLog:
    """
    Records identity events in their own commit.

    Call after the primary operation has committed: a failed audit write is
    logged and rolled back but never propagated, so it cannot undo or fail
    the operation that triggered it.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        action: Union[AuditAction, str],
        resource_type: Union[AuditResource, str],
        user_id: Optional[UUID] = None,
        details: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> bool:
        """Append one entry. Returns False if the write failed."""
        action_value = action.value if isinstance(action, AuditAction) else action
        resource_value = (
            resource_type.value if isinstance(resource_type, AuditResource) else resource_type
        )
        try:
            await self.uow.audit_events.create(
                AuditEvent(
                    action=action_value,
                    resource_type=resource_value,
                    user_id=user_id,
                    details=details,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            )
            await self.uow.commit()
            return True
        except Exception:
            logger.exception("Failed to record audit action %s", action_value)
            try:
                await self.uow.rollback()
            except Exception:
                logger.exception("Rollback after failed audit write also failed")
            return False

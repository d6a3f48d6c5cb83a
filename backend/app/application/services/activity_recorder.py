"""Activity recorder — single entry point for the append-only audit log.

Auditing is advisory: a failed write is logged and swallowed so that it
never rolls back the operation it describes.
"""

import logging
from typing import Any

from app.application.interfaces import ActivityLogRepository, UnitOfWork
from app.domain.entities import ActivityAction, ActivityEntry, RequestContext

logger = logging.getLogger(__name__)


class ActivityRecorder:
    """Persists one ActivityEntry per mutating operation.

    Usage:
        recorder = ActivityRecorder(activity_repository, unit_of_work)
        await recorder.record(
            user_id=7,
            action=ActivityAction.CREATE_WEBSITE,
            details={"website_id": 3, "website_name": "sunset-tours"},
            context=RequestContext(ip_address="10.0.0.1", user_agent="curl/8"),
        )
    """

    def __init__(self, repository: ActivityLogRepository, unit_of_work: UnitOfWork):
        self._repo = repository
        self._uow = unit_of_work

    async def record(
        self,
        user_id: int,
        action: ActivityAction,
        details: dict[str, Any] | None = None,
        context: RequestContext | None = None,
    ) -> ActivityEntry | None:
        """Append an entry after the audited change has been committed.

        Returns:
            The persisted entry, or None if the write failed.
        """
        context = context or RequestContext()
        entry = ActivityEntry(
            user_id=user_id,
            action=action,
            details=details or {},
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )

        try:
            saved = await self._repo.create(entry)
            await self._uow.commit()
        except Exception:
            logger.warning(
                "Failed to record activity %s for user %s", action.value, user_id, exc_info=True,
            )
            try:
                await self._uow.rollback()
            except Exception:
                logger.exception("Rollback after failed activity write also failed")
            return None

        logger.info("Activity [%s] user=%s details=%s", action.value, user_id, entry.details)
        return saved

    async def list_for_user(
        self, user_id: int, *, skip: int = 0, limit: int = 100
    ) -> list[ActivityEntry]:
        return await self._repo.list_by_user(user_id, skip=skip, limit=limit)

"""Read-back of the caller's activity log."""

from fastapi import APIRouter, Depends, Query

from app.application.schemas.activity import ActivityEntryResponse
from app.application.services import ActivityRecorder
from app.domain.entities import User
from app.infrastructure.dependencies import get_activity_recorder, get_current_user

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("", response_model=list[ActivityEntryResponse])
async def list_activity(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
) -> list[ActivityEntryResponse]:
    """The caller's activity entries, newest first."""
    entries = await recorder.list_for_user(current_user.id, skip=skip, limit=limit)
    return [ActivityEntryResponse.model_validate(e) for e in entries]

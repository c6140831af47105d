# Calls Feature - Router

from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.features.auth.dependencies import require_admin
from app.features.calls.models import CallRecord
from app.features.calls.schemas import CallRecordListResponse, CallRecordResponse
from app.features.notifications.registry import NotificationRegistry, get_notification_registry
from app.features.notifications.schemas import CallCategory
from app.features.session.schemas import CurrentUser


router = APIRouter(prefix="/calls", tags=["Calls"])


@router.get("", response_model=CallRecordListResponse)
async def list_calls(
    category: Optional[CallCategory] = Query(None, description="gelen, form or liste; all when omitted"),
    limit: int = Query(100, ge=1, le=500),
    skip: int = Query(0, ge=0),
    mark_seen: bool = Query(True, description="Clear the unseen badge for what is listed"),
    current_user: CurrentUser = Depends(require_admin),
    registry: NotificationRegistry = Depends(get_notification_registry),
):
    """
    Call-log records, newest first.

    Listing a category marks it as seen; listing without a category marks
    every category as seen.

    Requires admin access.
    """
    if category is None:
        query = CallRecord.find_all()
    else:
        query = CallRecord.find(CallRecord.arama_tipi == category.value)

    total = await query.count()
    records = await query.sort([("kayit_tarihi", -1)]).skip(skip).limit(limit).to_list()

    if mark_seen:
        tracker = await registry.tracker_for_user(current_user)
        if category is None:
            await tracker.clear_all()
        else:
            await tracker.clear(category)

    return CallRecordListResponse(
        calls=[CallRecordResponse(**record.model_dump()) for record in records],
        total=total,
    )

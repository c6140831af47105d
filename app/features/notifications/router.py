# Notifications Feature - Router

from fastapi import APIRouter, Depends
from app.features.auth.dependencies import get_current_user
from app.features.notifications.registry import NotificationRegistry, get_notification_registry
from app.features.notifications.schemas import CallCategory, NotificationCountsResponse
from app.features.notifications.tracker import NotificationTracker
from app.features.session.schemas import CurrentUser


router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _counts_response(tracker: NotificationTracker) -> NotificationCountsResponse:
    return NotificationCountsResponse(
        gelen=tracker.counts[CallCategory.GELEN],
        form=tracker.counts[CallCategory.FORM],
        liste=tracker.counts[CallCategory.LISTE],
        total=tracker.total,
    )


@router.get("", response_model=NotificationCountsResponse)
async def get_notification_counts(
    current_user: CurrentUser = Depends(get_current_user),
    registry: NotificationRegistry = Depends(get_notification_registry),
):
    """
    Unseen call-log records per category, as of the last poll.

    Requires authentication.
    """
    tracker = await registry.tracker_for_user(current_user)
    return _counts_response(tracker)


@router.post("/refresh", response_model=NotificationCountsResponse)
async def refresh_notification_counts(
    current_user: CurrentUser = Depends(get_current_user),
    registry: NotificationRegistry = Depends(get_notification_registry),
):
    """Recount now instead of waiting for the next poll."""
    tracker = await registry.tracker_for_user(current_user)
    await tracker.refresh_counts()
    return _counts_response(tracker)


@router.post("/clear-all", response_model=NotificationCountsResponse)
async def clear_all_notifications(
    current_user: CurrentUser = Depends(get_current_user),
    registry: NotificationRegistry = Depends(get_notification_registry),
):
    """Mark every category as seen."""
    tracker = await registry.tracker_for_user(current_user)
    await tracker.clear_all()
    return _counts_response(tracker)


@router.post("/{category}/clear", response_model=NotificationCountsResponse)
async def clear_notifications(
    category: CallCategory,
    current_user: CurrentUser = Depends(get_current_user),
    registry: NotificationRegistry = Depends(get_notification_registry),
):
    """
    Mark one category as seen.

    - **category**: `gelen`, `form` or `liste`
    """
    tracker = await registry.tracker_for_user(current_user)
    await tracker.clear(category)
    return _counts_response(tracker)

# Notifications Feature - Schemas

from enum import Enum
from pydantic import BaseModel


class CallCategory(str, Enum):
    """Call-log categories tracked for unseen badges."""
    GELEN = "gelen"  # inbound
    FORM = "form"    # triggered by a web form
    LISTE = "liste"  # triggered by an outbound call list


CURSOR_KEYS = {
    CallCategory.GELEN: "lastSeenGelenCallsTimestamp",
    CallCategory.FORM: "lastSeenFormCallsTimestamp",
    CallCategory.LISTE: "lastSeenListeCallsTimestamp",
}


class NotificationCountsResponse(BaseModel):
    """Unseen call-log records per category."""
    gelen: int = 0
    form: int = 0
    liste: int = 0
    total: int = 0

    class Config:
        json_schema_extra = {
            "example": {"gelen": 3, "form": 1, "liste": 0, "total": 4}
        }

# Dashboard Feature - Schemas

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    """Response schema for dashboard statistics."""
    incoming_calls: int
    pending_appointments: int
    incoming_forms: int
    active_doctors: int
    pending_list_contacts: int

    class Config:
        json_schema_extra = {
            "example": {
                "incoming_calls": 128,
                "pending_appointments": 7,
                "incoming_forms": 42,
                "active_doctors": 5,
                "pending_list_contacts": 63
            }
        }

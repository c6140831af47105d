# Session Feature - Schemas

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class Role(str, Enum):
    """Application-level role derived from an identity."""
    ADMIN = "admin"
    DOCTOR = "doctor"


class DoctorProfile(BaseModel):
    """Display-only subset of a doctor record."""
    ad: str
    soyad: str
    email: Optional[str] = None


class RoleOutcome(BaseModel):
    """
    Result of resolving a session into a role.

    ``role`` is None when there is no usable session. ``transient_error``
    marks a None role caused by an unreachable backend rather than by a
    missing role assignment.
    """
    role: Optional[Role] = None
    doctor_id: Optional[str] = None
    profile: Optional[DoctorProfile] = None
    transient_error: bool = False


class CurrentUser(BaseModel):
    """Authenticated caller with a resolved role."""
    identity_id: str
    session_id: str
    session_expires_at: Optional[datetime] = None
    role: Role
    doctor_id: Optional[str] = None
    profile: Optional[DoctorProfile] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class SessionResponse(BaseModel):
    """Resolved session as returned to the dashboard."""
    role: Role
    doctor_id: Optional[str] = None
    profile: Optional[DoctorProfile] = None
    landing_screen: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "role": "doctor",
                "doctor_id": "D1",
                "profile": {"ad": "Ayşe", "soyad": "Yılmaz", "email": "ayse@example.com"},
                "landing_screen": "appointments",
            }
        }

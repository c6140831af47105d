from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime
from app.features.session.schemas import SessionResponse


class LoginRequest(BaseModel):
    """Login request schema. ``role`` selects which login table is checked."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    role: Literal["admin", "doctor"] = "admin"

    class Config:
        json_schema_extra = {
            "example": {
                "username": "resepsiyon",
                "password": "Parola123",
                "role": "admin",
            }
        }


class LoginResponse(BaseModel):
    """Login response with access token and the resolved session."""

    access_token: str
    token_type: str = "bearer"
    session: SessionResponse


class CreateDoctorLoginRequest(BaseModel):
    """Admin request to create credentials for a doctor."""

    doktor_id: str
    kullanici_adi: str = Field(..., min_length=3, max_length=100)
    sifre: str = Field(..., min_length=6)


class DoctorLoginResponse(BaseModel):
    """Doctor login without its password hash."""

    id: str
    doktor_id: str
    kullanici_adi: str
    created_at: datetime


class UpdateDoctorLoginRequest(BaseModel):
    """Change a doctor's username and/or password."""

    kullanici_adi: Optional[str] = Field(None, min_length=3, max_length=100)
    sifre: Optional[str] = Field(None, min_length=6)


class CreateAdminRequest(BaseModel):
    kullanici_adi: str = Field(..., min_length=3, max_length=100)
    sifre: str = Field(..., min_length=6)


class UpdateAdminRequest(BaseModel):
    kullanici_adi: Optional[str] = Field(None, min_length=3, max_length=100)
    sifre: Optional[str] = Field(None, min_length=6)


class AdminResponse(BaseModel):
    """Admin account without its password hash."""

    id: str
    kullanici_adi: str
    created_at: datetime

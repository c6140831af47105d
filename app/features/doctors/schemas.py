# Doctors Feature - Schemas

from typing import Optional
from pydantic import BaseModel, Field, field_validator
from app.shared.schemas import blank_to_none


class DoctorResponse(BaseModel):
    """Doctor profile with its specialty name."""
    id: str
    ad: str
    soyad: str
    unvan: Optional[str] = None
    uzmanlik_id: Optional[str] = None
    uzmanlik: Optional[str] = None
    telefon: Optional[str] = None
    email: Optional[str] = None
    aktif: bool = True
    klinik_lokasyon: Optional[str] = None


class DoctorProfileRequest(BaseModel):
    """Fields a doctor may change on their own profile. Blank optional fields are cleared."""
    ad: str = Field(..., max_length=100)
    soyad: str = Field(..., max_length=100)
    unvan: Optional[str] = Field(None, max_length=50)
    uzmanlik_id: Optional[str] = None
    telefon: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = Field(None, max_length=200)
    klinik_lokasyon: Optional[str] = Field(None, max_length=200)

    @field_validator('ad', 'soyad')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('First and last name are required')
        return v

    @field_validator('unvan', 'uzmanlik_id', 'telefon', 'email', 'klinik_lokasyon', mode='before')
    @classmethod
    def clean_text(cls, v):
        return blank_to_none(v)


class DoctorRequest(DoctorProfileRequest):
    """Admin create/update of a doctor."""
    aktif: bool = True

# Clinic Services Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.shared.schemas import blank_to_none


class ClinicServiceRequest(BaseModel):
    """Create or replace a service. Zero price or duration means "not set"."""

    hizmet_adi: str = Field(..., min_length=1, max_length=200)
    uzmanlik_id: Optional[str] = None
    fiyat: Optional[float] = Field(None, ge=0)
    sure_dakika: Optional[int] = Field(None, ge=0)
    aciklama: Optional[str] = Field(None, max_length=1000)
    aktif: bool = True

    @field_validator('hizmet_adi')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Service name is required')
        return v

    @field_validator('uzmanlik_id', 'aciklama', mode='before')
    @classmethod
    def clean_text(cls, v):
        return blank_to_none(v)

    @field_validator('fiyat', 'sure_dakika')
    @classmethod
    def zero_is_unset(cls, v):
        return v or None


class ClinicServiceResponse(BaseModel):
    id: str
    hizmet_adi: str
    uzmanlik_id: Optional[str] = None
    uzmanlik: Optional[str] = None
    fiyat: Optional[float] = None
    sure_dakika: Optional[int] = None
    aciklama: Optional[str] = None
    aktif: bool
    olusturulma_tarihi: datetime

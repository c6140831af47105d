# Appointments Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.features.appointments.models import AppointmentStatus, SmsStatus


class AppointmentResponse(BaseModel):
    """Appointment joined with patient, doctor and service names."""
    id: str
    randevu_tarihi: datetime
    randevu_tipi: Optional[str] = None
    online_link: Optional[str] = None
    randevu_notu: Optional[str] = None
    durum: str
    red_nedeni: Optional[str] = None
    sms: str
    olusturulma_tarihi: datetime
    guncellenme_tarihi: datetime
    doktor_id: Optional[str] = None
    doktor_adi: Optional[str] = None
    hasta_adi: Optional[str] = None
    hasta_telefon: Optional[str] = None
    hizmet_adi: Optional[str] = None


class UpdateAppointmentStatusRequest(BaseModel):
    """Request to move an appointment to a new status."""
    durum: AppointmentStatus
    red_nedeni: Optional[str] = Field(None, max_length=500)


class UpdateSmsStatusRequest(BaseModel):
    sms: SmsStatus = "Gönderildi"


class UpdateAppointmentRequest(BaseModel):
    """
    Edit an appointment's time, type, link or note.

    An unrecognised ``randevu_tipi`` falls back to ``klinik``.
    """
    randevu_tarihi: datetime = Field(None)
    randevu_tipi: Optional[str] = None
    online_link: Optional[str] = Field(None, max_length=500)
    randevu_notu: Optional[str] = Field(None, max_length=1000)

    @field_validator('randevu_tipi')
    @classmethod
    def normalize_type(cls, v: Optional[str]) -> str:
        v = (v or "").strip().lower()
        return v if v in ("online", "klinik") else "klinik"

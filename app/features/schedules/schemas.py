# Schedules Feature - Schemas

from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from app.shared.schemas import blank_to_none


class ScheduleEntryRequest(BaseModel):
    """
    Calendar block. ``tarih`` accepts ``YYYY-MM-DD`` or ``DD-MM-YYYY``;
    the end time must be after the start time.
    """

    tarih: date
    baslangic_saat: time
    bitis_saat: time
    musait: bool = True
    not_bilgi: Optional[str] = Field(None, max_length=500)

    @field_validator('tarih', mode='before')
    @classmethod
    def parse_day_first(cls, v):
        if isinstance(v, str):
            try:
                return datetime.strptime(v.strip(), "%d-%m-%Y").date()
            except ValueError:
                return v
        return v

    @field_validator('not_bilgi', mode='before')
    @classmethod
    def clean_note(cls, v):
        return blank_to_none(v)

    @model_validator(mode='after')
    def check_times(self):
        if self.bitis_saat <= self.baslangic_saat:
            raise ValueError('End time must be after start time')
        return self


class ScheduleEntryResponse(BaseModel):
    id: str
    doktor_id: str
    tarih: str
    baslangic_saat: str
    bitis_saat: str
    musait: bool
    not_bilgi: Optional[str] = None

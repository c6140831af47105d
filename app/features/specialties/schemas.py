# Specialties Feature - Schemas

from typing import Optional
from pydantic import BaseModel, Field, field_validator
from app.shared.schemas import blank_to_none


class SpecialtyRequest(BaseModel):
    ad: str = Field(..., min_length=1, max_length=100)
    aciklama: Optional[str] = Field(None, max_length=500)

    @field_validator('ad')
    @classmethod
    def capitalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Specialty name is required')
        return v[:1].upper() + v[1:]

    @field_validator('aciklama', mode='before')
    @classmethod
    def clean_description(cls, v):
        return blank_to_none(v)


class SpecialtyResponse(BaseModel):
    id: str
    ad: str
    aciklama: Optional[str] = None

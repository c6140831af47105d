# Specialties Feature - Models

from typing import Optional
from app.shared.models import BaseDocument


class Specialty(BaseDocument):
    """Medical specialty (uzmanlık alanı)."""

    ad: str
    aciklama: Optional[str] = None

    class Settings:
        name = "uzmanliklar"
        use_state_management = True

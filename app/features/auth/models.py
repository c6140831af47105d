from beanie import Indexed
from datetime import datetime
from app.shared.models import BaseDocument, TimestampMixin


class AdminAccount(BaseDocument, TimestampMixin):
    """Administrator login. Membership here grants the Admin role."""

    kullanici_adi: Indexed(str, unique=True)
    sifre: str  # bcrypt hash

    class Settings:
        name = "admin"
        use_state_management = True


class DoctorLogin(BaseDocument, TimestampMixin):
    """Doctor login linked to a doctor profile."""

    doktor_id: Indexed(str)
    kullanici_adi: Indexed(str, unique=True)
    sifre: str  # bcrypt hash

    class Settings:
        name = "doktor_giris"
        use_state_management = True


class AuthSession(BaseDocument, TimestampMixin):
    """An authenticated session. ``user_id`` is the identity id."""

    user_id: Indexed(str)
    expires_at: datetime
    revoked: bool = False

    class Settings:
        name = "auth_sessions"
        use_state_management = True

    def is_expired(self) -> bool:
        return self.expires_at <= datetime.utcnow()

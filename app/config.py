"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - absent URL means the data store is not configured
    MONGODB_URL: Optional[str] = None
    DATABASE_NAME: str = "klinik_panel"

    # JWT
    JWT_SECRET_KEY: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Application
    APP_NAME: str = "Clinic Voice Panel API"
    API_V1_PREFIX: str = "/api/v1"
    PORT: int = 8000

    # CORS - dashboard frontends
    BACKEND_CORS_ORIGINS: str = '["http://localhost:5173", "http://localhost:3000"]'

    # Workflow automation webhooks (n8n)
    APPOINTMENT_APPROVED_WEBHOOK_URL: Optional[str] = None
    APPOINTMENT_REJECTED_WEBHOOK_URL: Optional[str] = None
    CALL_LIST_WEBHOOK_URL: Optional[str] = None
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0

    # Notification badges
    NOTIFICATION_POLL_INTERVAL_SECONDS: float = 30.0

    # Session resolution
    ROLE_LOOKUP_RETRIES: int = 1
    ROLE_LOOKUP_RETRY_WAIT_SECONDS: float = 0.5

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string."""
        try:
            return json.loads(self.BACKEND_CORS_ORIGINS)
        except ValueError:
            return ["http://localhost:5173"]

    @property
    def is_datastore_configured(self) -> bool:
        """Whether a data store URL has been provided."""
        return bool(self.MONGODB_URL)


settings = Settings()

"""MongoDB database connection manager."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from beanie import init_beanie
from typing import Optional

from app.config import settings
from app.core.logging import logger


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB and initialize Beanie."""
        if not settings.is_datastore_configured:
            logger.warning("Data store not configured - MONGODB_URL is missing")
            return

        cls.client = AsyncIOMotorClient(settings.MONGODB_URL)

        # Import document models
        from app.features.auth.models import AdminAccount, DoctorLogin, AuthSession
        from app.features.doctors.models import Doctor
        from app.features.specialties.models import Specialty
        from app.features.clinic_services.models import ClinicService
        from app.features.schedules.models import DoctorScheduleEntry
        from app.features.calls.models import CallRecord
        from app.features.appointments.models import Appointment, AppointmentContact
        from app.features.call_lists.models import CallList, CallListContact
        from app.features.forms.models import WebForm
        from app.features.notifications.storage import StoredCursor

        await init_beanie(
            database=cls.client[settings.DATABASE_NAME],
            document_models=[
                AdminAccount,
                DoctorLogin,
                AuthSession,
                Doctor,
                Specialty,
                DoctorScheduleEntry,
                CallRecord,
                Appointment,
                AppointmentContact,
                ClinicService,
                CallList,
                CallListContact,
                WebForm,
                StoredCursor,
            ]
        )

        logger.info(f"Connected to MongoDB database: {settings.DATABASE_NAME}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            cls.client = None
            logger.info("Closed MongoDB connection")

    @classmethod
    def get_database(cls) -> Optional[AsyncIOMotorDatabase]:
        """Return the configured database, or None when disconnected."""
        if cls.client is None:
            return None
        return cls.client[settings.DATABASE_NAME]

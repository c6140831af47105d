from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config import settings
from app.database import Database
from app.core.datastore import DataStore
from app.features.auth.client import AuthClient
from app.features.auth.router import router as auth_router
from app.features.appointments.router import router as appointments_router
from app.features.calls.router import router as calls_router
from app.features.clinic_services.router import router as clinic_services_router
from app.features.call_lists.router import router as call_lists_router
from app.features.dashboard.router import router as dashboard_router
from app.features.doctors.router import router as doctors_router
from app.features.forms.router import router as forms_router
from app.features.notifications.registry import notification_registry
from app.features.notifications.router import router as notifications_router
from app.features.schedules.router import router as schedules_router
from app.features.session.resolver import SessionResolver
from app.features.specialties.router import router as specialties_router
from app.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info("Starting Clinic Voice Panel API...")
    await Database.connect_db()

    # Start/stop notification trackers as sessions come and go
    notification_registry.watch(SessionResolver(AuthClient(), DataStore()))

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await notification_registry.shutdown()
    await Database.close_db()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Clinic voice-call automation dashboard API",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth_router, prefix=settings.API_V1_PREFIX)
app.include_router(dashboard_router, prefix=settings.API_V1_PREFIX)
app.include_router(notifications_router, prefix=settings.API_V1_PREFIX)
app.include_router(calls_router, prefix=settings.API_V1_PREFIX)
app.include_router(appointments_router, prefix=settings.API_V1_PREFIX)
app.include_router(call_lists_router, prefix=settings.API_V1_PREFIX)
app.include_router(doctors_router, prefix=settings.API_V1_PREFIX)
app.include_router(schedules_router, prefix=settings.API_V1_PREFIX)
app.include_router(specialties_router, prefix=settings.API_V1_PREFIX)
app.include_router(clinic_services_router, prefix=settings.API_V1_PREFIX)
app.include_router(forms_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Clinic Voice Panel API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "datastore_configured": settings.is_datastore_configured,
    }

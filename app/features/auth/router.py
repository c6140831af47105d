from typing import List
from fastapi import APIRouter, Depends, status
from app.core.datastore import DataStore, get_datastore
from app.features.auth.schemas import (
    LoginRequest,
    LoginResponse,
    CreateDoctorLoginRequest,
    UpdateDoctorLoginRequest,
    DoctorLoginResponse,
    CreateAdminRequest,
    UpdateAdminRequest,
    AdminResponse,
)
from app.features.auth.service import AuthService
from app.features.auth.client import AuthClient
from app.features.auth.dependencies import get_auth_client, get_current_user, require_admin
from app.features.auth.models import AdminAccount, DoctorLogin
from app.features.session.resolver import SessionResolver
from app.features.session.routing import default_landing_screen
from app.features.session.schemas import CurrentUser, SessionResponse
from app.shared.exceptions import CredentialsException, ServiceUnavailableException
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _doctor_login_response(doctor_login: DoctorLogin) -> DoctorLoginResponse:
    return DoctorLoginResponse(
        id=doctor_login.id,
        doktor_id=doctor_login.doktor_id,
        kullanici_adi=doctor_login.kullanici_adi,
        created_at=doctor_login.created_at,
    )


def _admin_response(admin: AdminAccount) -> AdminResponse:
    return AdminResponse(id=admin.id, kullanici_adi=admin.kullanici_adi, created_at=admin.created_at)


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    store: DataStore = Depends(get_datastore),
):
    """
    Sign in and resolve the session's role.

    - **username**: Login name
    - **password**: Password
    - **role**: `admin` or `doctor`, selects which login table is checked
    """
    session, access_token = await AuthService.sign_in(login_data)

    # Resolve first, then pick the landing screen
    resolver = SessionResolver(AuthClient(access_token), store)
    outcome = await resolver.resolve_session(session)
    if outcome.transient_error:
        raise ServiceUnavailableException("Could not verify account role, please retry")
    if outcome.role is None:
        raise CredentialsException("Account has no panel access")

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        session=SessionResponse(
            role=outcome.role,
            doctor_id=outcome.doctor_id,
            profile=outcome.profile,
            landing_screen=default_landing_screen(outcome.role),
        ),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(auth: AuthClient = Depends(get_auth_client)):
    """Sign out the current session. Safe to call without a session."""
    await auth.sign_out()
    return MessageResponse(message="Signed out")


@router.get("/session", response_model=SessionResponse)
async def get_session(current_user: CurrentUser = Depends(get_current_user)):
    """
    Resolve the current session.

    Sessions whose identity is neither an admin nor a doctor are signed out
    and answered with 401.
    """
    return SessionResponse(
        role=current_user.role,
        doctor_id=current_user.doctor_id,
        profile=current_user.profile,
        landing_screen=default_landing_screen(current_user.role),
    )


@router.get("/doctor-logins", response_model=List[DoctorLoginResponse])
async def list_doctor_logins(current_user: CurrentUser = Depends(require_admin)):
    """List doctor credentials. Admin only."""
    doctor_logins = await AuthService.list_doctor_logins()
    return [_doctor_login_response(d) for d in doctor_logins]


@router.post("/doctor-logins", response_model=DoctorLoginResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor_login(
    request: CreateDoctorLoginRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Create credentials for a doctor. Admin only."""
    doctor_login = await AuthService.create_doctor_login(request)
    return _doctor_login_response(doctor_login)


@router.put("/doctor-logins/{login_id}", response_model=DoctorLoginResponse)
async def update_doctor_login(
    login_id: str,
    request: UpdateDoctorLoginRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Change a doctor's username or password. Admin only."""
    doctor_login = await AuthService.update_doctor_login(login_id, request)
    return _doctor_login_response(doctor_login)


@router.delete("/doctor-logins/{login_id}", response_model=MessageResponse)
async def delete_doctor_login(
    login_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Delete doctor credentials and end their sessions. Admin only."""
    await AuthService.delete_doctor_login(login_id)
    return MessageResponse(message="Doctor login deleted")


@router.get("/admins", response_model=List[AdminResponse])
async def list_admins(current_user: CurrentUser = Depends(require_admin)):
    admins = await AuthService.list_admins()
    return [_admin_response(a) for a in admins]


@router.post("/admins", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    request: CreateAdminRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Create another admin account. Admin only."""
    admin = await AuthService.create_admin(request)
    return _admin_response(admin)


@router.put("/admins/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: str,
    request: UpdateAdminRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    admin = await AuthService.update_admin(admin_id, request)
    return _admin_response(admin)


@router.delete("/admins/{admin_id}", response_model=MessageResponse)
async def delete_admin(
    admin_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Delete an admin account and end its sessions. Your own account cannot be deleted."""
    await AuthService.delete_admin(admin_id, current_user.identity_id)
    return MessageResponse(message="Admin deleted")

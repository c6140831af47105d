from datetime import datetime, timedelta
from typing import List, Optional
from app.config import settings
from app.features.auth.events import auth_events
from app.features.auth.models import AdminAccount, DoctorLogin, AuthSession
from app.features.auth.schemas import (
    LoginRequest,
    CreateDoctorLoginRequest,
    UpdateDoctorLoginRequest,
    CreateAdminRequest,
    UpdateAdminRequest,
)
from app.features.doctors.models import Doctor
from app.core.security import verify_password, get_password_hash, create_session_token, decode_session_token
from app.shared.exceptions import BadRequestException, CredentialsException, ConflictException, NotFoundException
from app.core.logging import logger


class AuthService:
    """Authentication service: sign-in, sessions and doctor credentials."""

    @staticmethod
    async def sign_in(login_data: LoginRequest) -> tuple[AuthSession, str]:
        """
        Authenticate against the login table of the selected role.

        Returns:
            tuple: (session, access_token)
        """
        if login_data.role == "admin":
            account = await AdminAccount.find_one(AdminAccount.kullanici_adi == login_data.username)
        else:
            account = await DoctorLogin.find_one(DoctorLogin.kullanici_adi == login_data.username)

        if not account or not verify_password(login_data.password, account.sifre):
            raise CredentialsException("Invalid username or password")

        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        session = AuthSession(
            user_id=account.id,
            expires_at=datetime.utcnow() + expires_delta,
        )
        await session.insert()

        access_token = create_session_token(account.id, session.id, expires_delta)

        logger.info(f"{login_data.role} {login_data.username} signed in (session {session.id})")
        await auth_events.emit("SIGNED_IN", session)

        return session, access_token

    @staticmethod
    async def get_session(token: Optional[str]) -> Optional[AuthSession]:
        """
        Load the live session behind a token.

        An expired session is revoked and announced as SIGNED_OUT.
        """
        if not token:
            return None

        session_id = decode_session_token(token)
        if not session_id:
            return None

        session = await AuthSession.get(session_id)
        if session is None or session.revoked:
            return None

        if session.is_expired():
            session.revoked = True
            await session.save()
            logger.info(f"Session {session.id} expired")
            await auth_events.emit("SIGNED_OUT", session)
            return None

        return session

    @staticmethod
    async def sign_out(session: AuthSession):
        """Revoke a session and announce it."""
        if session.revoked:
            return
        session.revoked = True
        session.update_timestamp()
        await session.save()
        logger.info(f"Session {session.id} signed out")
        await auth_events.emit("SIGNED_OUT", session)

    @staticmethod
    async def create_doctor_login(data: CreateDoctorLoginRequest) -> DoctorLogin:
        """Create login credentials for an existing doctor. A doctor has at most one login."""
        doctor = await Doctor.get(data.doktor_id)
        if doctor is None:
            raise NotFoundException("Doctor not found")

        if await DoctorLogin.find_one(DoctorLogin.doktor_id == data.doktor_id):
            raise ConflictException("Doctor already has a login")

        await AuthService._ensure_username_free(DoctorLogin, data.kullanici_adi)

        doctor_login = DoctorLogin(
            doktor_id=data.doktor_id,
            kullanici_adi=data.kullanici_adi,
            sifre=get_password_hash(data.sifre),
        )
        await doctor_login.insert()

        logger.info(f"Created login {data.kullanici_adi} for doctor {data.doktor_id}")
        return doctor_login

    @staticmethod
    async def list_doctor_logins() -> List[DoctorLogin]:
        return await DoctorLogin.find_all().sort("kullanici_adi").to_list()

    @staticmethod
    async def update_doctor_login(login_id: str, data: UpdateDoctorLoginRequest) -> DoctorLogin:
        doctor_login = await DoctorLogin.get(login_id)
        if doctor_login is None:
            raise NotFoundException("Doctor login not found")

        await AuthService._apply_credentials(DoctorLogin, doctor_login, data)
        logger.info(f"Updated doctor login {doctor_login.kullanici_adi}")
        return doctor_login

    @staticmethod
    async def delete_doctor_login(login_id: str):
        """Delete a doctor login and revoke its open sessions."""
        doctor_login = await DoctorLogin.get(login_id)
        if doctor_login is None:
            raise NotFoundException("Doctor login not found")

        await doctor_login.delete()
        await AuthService.revoke_sessions(login_id)

        logger.info(f"Deleted doctor login {doctor_login.kullanici_adi}")

    @staticmethod
    async def list_admins() -> List[AdminAccount]:
        return await AdminAccount.find_all().sort("kullanici_adi").to_list()

    @staticmethod
    async def create_admin(data: CreateAdminRequest) -> AdminAccount:
        await AuthService._ensure_username_free(AdminAccount, data.kullanici_adi)

        admin = AdminAccount(
            kullanici_adi=data.kullanici_adi,
            sifre=get_password_hash(data.sifre),
        )
        await admin.insert()

        logger.info(f"Created admin {data.kullanici_adi}")
        return admin

    @staticmethod
    async def update_admin(admin_id: str, data: UpdateAdminRequest) -> AdminAccount:
        admin = await AdminAccount.get(admin_id)
        if admin is None:
            raise NotFoundException("Admin not found")

        await AuthService._apply_credentials(AdminAccount, admin, data)
        logger.info(f"Updated admin {admin.kullanici_adi}")
        return admin

    @staticmethod
    async def delete_admin(admin_id: str, current_identity_id: str):
        """Delete an admin account and revoke its open sessions. Admins cannot delete themselves."""
        if admin_id == current_identity_id:
            raise BadRequestException("You cannot delete your own account")

        admin = await AdminAccount.get(admin_id)
        if admin is None:
            raise NotFoundException("Admin not found")

        await admin.delete()
        await AuthService.revoke_sessions(admin_id)

        logger.info(f"Deleted admin {admin.kullanici_adi}")

    @staticmethod
    async def revoke_sessions(identity_id: str):
        """Sign out every open session of an identity."""
        open_sessions = await AuthSession.find(
            AuthSession.user_id == identity_id,
            AuthSession.revoked == False,
        ).to_list()
        for session in open_sessions:
            await AuthService.sign_out(session)

    @staticmethod
    async def _ensure_username_free(account_model, username: str, account_id: Optional[str] = None):
        existing = await account_model.find_one(account_model.kullanici_adi == username)
        if existing and existing.id != account_id:
            raise ConflictException("Username already taken")

    @staticmethod
    async def _apply_credentials(account_model, account, data):
        update_dict = data.model_dump(exclude_unset=True, exclude_none=True)

        if "kullanici_adi" in update_dict:
            await AuthService._ensure_username_free(account_model, update_dict["kullanici_adi"], account.id)
            account.kullanici_adi = update_dict["kullanici_adi"]
        if "sifre" in update_dict:
            account.sifre = get_password_hash(update_dict["sifre"])

        account.update_timestamp()
        await account.save()

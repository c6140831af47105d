from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from app.core.datastore import DataStore, get_datastore
from app.features.auth.client import AuthClient, SessionLookupError
from app.features.session.resolver import SessionResolver
from app.features.session.schemas import CurrentUser, Role
from app.shared.exceptions import CredentialsException, ForbiddenException, ServiceUnavailableException


# HTTP Bearer security scheme; missing credentials are handled below
security = HTTPBearer(auto_error=False)


def get_auth_client(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthClient:
    """Auth client bound to the caller's bearer token."""
    return AuthClient(credentials.credentials if credentials else None)


def get_session_resolver(
    auth: AuthClient = Depends(get_auth_client),
    store: DataStore = Depends(get_datastore),
) -> SessionResolver:
    return SessionResolver(auth, store)


async def get_current_user(
    auth: AuthClient = Depends(get_auth_client),
    resolver: SessionResolver = Depends(get_session_resolver),
) -> CurrentUser:
    """
    Dependency to get the current authenticated user with a resolved role.

    Raises:
        CredentialsException: If there is no session or it carries no role
        ServiceUnavailableException: If the session or role could not be looked up
    """
    try:
        session = await auth.get_session()
    except SessionLookupError:
        raise ServiceUnavailableException("Could not verify session, please retry")
    if session is None:
        raise CredentialsException("Not authenticated")

    outcome = await resolver.resolve_session(session)
    if outcome.transient_error:
        raise ServiceUnavailableException("Could not verify account role, please retry")
    if outcome.role is None:
        raise CredentialsException("Account has no panel access")

    return CurrentUser(
        identity_id=session.user_id,
        session_id=session.id,
        session_expires_at=session.expires_at,
        role=outcome.role,
        doctor_id=outcome.doctor_id,
        profile=outcome.profile,
    )


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """Dependency that only lets admins through."""
    if current_user.role != Role.ADMIN:
        raise ForbiddenException("Admin access required")
    return current_user

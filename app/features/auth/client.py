from typing import Optional

from beanie.exceptions import CollectionWasNotInitialized
from pymongo.errors import PyMongoError

from app.features.auth.events import AuthStateCallback, Subscription, auth_events
from app.features.auth.models import AuthSession
from app.features.auth.service import AuthService
from app.core.logging import logger


class SessionLookupError(Exception):
    """Raised when the session store cannot be reached."""


class AuthClient:
    """Auth subsystem handle for one caller's bearer token."""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    async def get_session(self) -> Optional[AuthSession]:
        """
        Current session for the token, or None when there is none.

        Raises:
            SessionLookupError: If the session store is unreachable or not configured
        """
        try:
            return await AuthService.get_session(self.token)
        except (PyMongoError, CollectionWasNotInitialized) as e:
            logger.warning(f"Session lookup failed: {e}")
            raise SessionLookupError(str(e)) from e

    async def sign_out(self, session: Optional[AuthSession] = None):
        """Revoke the given session, or the token's own session."""
        try:
            if session is None:
                session = await self.get_session()
            if session is None:
                return
            await AuthService.sign_out(session)
        except SessionLookupError:
            logger.error("Sign-out skipped: session store unavailable")
        except (PyMongoError, CollectionWasNotInitialized) as e:
            logger.error(f"Sign-out of session {session.id} failed: {e}")

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        return auth_events.subscribe(callback)

# Session Feature - Role Resolver

from typing import Awaitable, Callable, List, Optional

from pydantic import ValidationError
from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt, wait_fixed

from app.config import settings
from app.core.datastore import DataStore, LookupResult, LookupStatus
from app.core.logging import logger
from app.features.auth.client import AuthClient, SessionLookupError
from app.features.auth.events import AuthChangeEvent, Subscription
from app.features.auth.models import AuthSession
from app.features.session.schemas import DoctorProfile, Role, RoleOutcome


ADMIN_COLLECTION = "admin"
DOCTOR_LOGIN_COLLECTION = "doktor_giris"
DOCTOR_COLLECTION = "doktor"

PROFILE_FIELDS = ["ad", "soyad", "email"]

SessionChangeCallback = Callable[[RoleOutcome, Optional[AuthSession]], Awaitable[None]]


class SessionResolver:
    """
    Turns an authenticated session into an application role.

    Admin membership is checked first and short-circuits; doctor-login
    membership second. An identity matching neither is signed out. Lookups
    that fail at the backend are retried and, if still failing, reported as
    ``transient_error`` without signing the identity out.
    """

    def __init__(
        self,
        auth: AuthClient,
        store: DataStore,
        retries: Optional[int] = None,
        retry_wait: Optional[float] = None,
    ):
        self.auth = auth
        self.store = store
        self.retries = settings.ROLE_LOOKUP_RETRIES if retries is None else retries
        self.retry_wait = settings.ROLE_LOOKUP_RETRY_WAIT_SECONDS if retry_wait is None else retry_wait
        self.outcome = RoleOutcome()

    async def resolve_session(self, session: Optional[AuthSession] = None) -> RoleOutcome:
        """
        Resolve the current (or given) session.

        Args:
            session: Session to resolve; looked up through the auth client when omitted

        Returns:
            RoleOutcome: the resolved role, also stored on ``self.outcome``
        """
        outcome = await self._resolve(session)
        self.outcome = outcome
        return outcome

    async def _resolve(self, session: Optional[AuthSession]) -> RoleOutcome:
        if session is None:
            try:
                session = await self.auth.get_session()
            except SessionLookupError as e:
                logger.error(f"Session lookup unavailable: {e}")
                return RoleOutcome(transient_error=True)
        if session is None:
            return RoleOutcome()

        identity_id = session.user_id

        admin = await self._lookup(ADMIN_COLLECTION, identity_id, ["_id"])
        if admin.found:
            return RoleOutcome(role=Role.ADMIN)
        if admin.status == LookupStatus.TRANSIENT_ERROR:
            return self._unavailable(identity_id, admin)

        doctor_login = await self._lookup(DOCTOR_LOGIN_COLLECTION, identity_id, ["_id", "doktor_id"])
        if doctor_login.found:
            doctor_id = doctor_login.row.get("doktor_id")
            profile = await self._fetch_profile(doctor_id)
            return RoleOutcome(role=Role.DOCTOR, doctor_id=doctor_id, profile=profile)
        if doctor_login.status == LookupStatus.TRANSIENT_ERROR:
            return self._unavailable(identity_id, doctor_login)

        # Authenticated but neither admin nor doctor: end the session
        logger.warning(f"Identity {identity_id} has no admin or doctor role - signing out")
        await self.auth.sign_out(session)
        return RoleOutcome()

    async def _lookup(self, collection: str, identity_id: str, projection: List[str]) -> LookupResult:
        """Look up one row, retrying while the store answers with a transient error."""

        def log_retry(state: RetryCallState):
            logger.warning(
                f"Retrying {collection} lookup for {identity_id} "
                f"({state.attempt_number}/{self.retries}): {state.outcome.result().error}"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_result(lambda result: result.status == LookupStatus.TRANSIENT_ERROR),
            before_sleep=log_retry,
            # Out of attempts: hand back the last transient result
            retry_error_callback=lambda state: state.outcome.result(),
        )
        return await retrying(self.store.lookup_one, collection, {"_id": identity_id}, projection)

    def _unavailable(self, identity_id: str, result: LookupResult) -> RoleOutcome:
        logger.error(f"Role lookup unavailable for {identity_id}: {result.error}")
        return RoleOutcome(transient_error=True)

    async def _fetch_profile(self, doctor_id: Optional[str]) -> Optional[DoctorProfile]:
        """Best-effort display profile; failures leave it empty."""
        if not doctor_id:
            return None

        result = await self.store.lookup_one(DOCTOR_COLLECTION, {"_id": doctor_id}, PROFILE_FIELDS)
        if not result.found:
            if result.status == LookupStatus.TRANSIENT_ERROR:
                logger.warning(f"Could not fetch doctor profile {doctor_id}: {result.error}")
            return None

        try:
            return DoctorProfile(**{field: result.row.get(field) for field in PROFILE_FIELDS})
        except ValidationError as e:
            logger.warning(f"Doctor {doctor_id} has an incomplete profile: {e}")
            return None

    def on_session_change(self, callback: SessionChangeCallback) -> Subscription:
        """
        Re-resolve whenever the auth subsystem reports a session change.

        A present session is resolved afresh; a signed-out one yields an
        empty outcome immediately, without lookups. The callback receives
        the outcome and the session carried by the event.
        """
        async def handle(event: AuthChangeEvent, session: Optional[AuthSession]):
            if event == "SIGNED_OUT" or session is None:
                outcome = RoleOutcome()
                self.outcome = outcome
            else:
                outcome = await self.resolve_session(session)
            await callback(outcome, session)

        return self.auth.on_auth_state_change(handle)

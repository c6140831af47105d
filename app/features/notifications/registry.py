# Notifications Feature - Per-identity trackers

import asyncio
import time
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from app.core.datastore import DataStore
from app.core.logging import logger
from app.features.auth.events import Subscription
from app.features.auth.models import AuthSession
from app.features.notifications.storage import MongoCursorStorage
from app.features.notifications.tracker import NotificationTracker, NotificationTrackerError
from app.features.session.resolver import SessionResolver
from app.features.session.schemas import CurrentUser, RoleOutcome
from app.shared.exceptions import ServiceUnavailableException


class NotificationRegistry:
    """
    Runs one NotificationTracker per signed-in identity.

    The registry remembers when each known session of an identity expires.
    A tracker keeps polling only while at least one of them is still live,
    so a client that simply goes away does not leave a poller behind.
    """

    def __init__(
        self,
        store: Optional[DataStore] = None,
        storage=None,
        interval: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        monotonic: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.utcnow,
    ):
        self.store = store or DataStore()
        self.storage = storage or MongoCursorStorage()
        self.interval = interval
        self._sleep = sleep
        self._monotonic = monotonic
        self._now = now
        self.trackers: Dict[str, NotificationTracker] = {}
        # identity id -> session id -> expiry (naive UTC, None = no expiry)
        self.sessions: Dict[str, Dict[str, Optional[datetime]]] = {}
        self._subscription: Optional[Subscription] = None

    def remember_session(self, identity_id: str, session_id: str, expires_at: Optional[datetime]):
        self.sessions.setdefault(identity_id, {})[session_id] = expires_at

    def forget_session(self, identity_id: str, session_id: str):
        sessions = self.sessions.get(identity_id)
        if sessions is not None:
            sessions.pop(session_id, None)

    def has_live_session(self, identity_id: str) -> bool:
        """Drop expired sessions of an identity and report whether any remain."""
        now = self._now()
        sessions = self.sessions.get(identity_id, {})
        for session_id, expires_at in list(sessions.items()):
            if expires_at is not None and expires_at <= now:
                del sessions[session_id]
        return bool(sessions)

    async def tracker_for(
        self,
        identity_id: str,
        session_id: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> NotificationTracker:
        """
        Running tracker for an identity, started and initialized on first use.

        Raises:
            ServiceUnavailableException: If the tracker stopped before its first count
        """
        if session_id is not None:
            self.remember_session(identity_id, session_id, expires_at)

        tracker = self.trackers.get(identity_id)
        if tracker is None:
            tracker = NotificationTracker(
                identity_id,
                self.store,
                self.storage,
                interval=self.interval,
                sleep=self._sleep,
                monotonic=self._monotonic,
                keep_alive=lambda: self.has_live_session(identity_id),
            )
            self.trackers[identity_id] = tracker
            logger.debug(f"Started notification tracker for {identity_id}")

        tracker.start()
        try:
            await tracker.wait_ready()
        except NotificationTrackerError as e:
            logger.error(str(e))
            if self.trackers.get(identity_id) is tracker and not tracker.running:
                del self.trackers[identity_id]
            raise ServiceUnavailableException("Notification counts are unavailable, please retry")
        return tracker

    async def tracker_for_user(self, current_user: CurrentUser) -> NotificationTracker:
        """Tracker for the caller, keeping the caller's session alive for it."""
        return await self.tracker_for(
            current_user.identity_id,
            current_user.session_id,
            current_user.session_expires_at,
        )

    async def stop(self, identity_id: str):
        self.sessions.pop(identity_id, None)
        tracker = self.trackers.pop(identity_id, None)
        if tracker is not None:
            await tracker.stop()
            logger.debug(f"Stopped notification tracker for {identity_id}")

    def watch(self, resolver: SessionResolver):
        """Start and stop trackers as sessions are resolved or end."""
        self._subscription = resolver.on_session_change(self._on_session_change)

    async def _on_session_change(self, outcome: RoleOutcome, session: Optional[AuthSession]):
        if session is None:
            return
        if outcome.role is not None:
            await self.tracker_for(session.user_id, session.id, getattr(session, "expires_at", None))
        elif not outcome.transient_error:
            # Other sessions of the same identity keep the tracker running
            self.forget_session(session.user_id, session.id)
            if not self.has_live_session(session.user_id):
                await self.stop(session.user_id)

    async def shutdown(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for identity_id in list(self.trackers):
            await self.stop(identity_id)


notification_registry = NotificationRegistry()


def get_notification_registry() -> NotificationRegistry:
    """Dependency for the notification registry."""
    return notification_registry

"""In-process auth state change notifications."""

from typing import Awaitable, Callable, List, Literal, Optional

from app.features.auth.models import AuthSession
from app.core.logging import logger


AuthChangeEvent = Literal["SIGNED_IN", "SIGNED_OUT"]
AuthStateCallback = Callable[[AuthChangeEvent, Optional[AuthSession]], Awaitable[None]]


class Subscription:
    """Handle returned by ``AuthEventBus.subscribe``."""

    def __init__(self, bus: "AuthEventBus", callback: AuthStateCallback):
        self._bus = bus
        self._callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active:
            self._bus._remove(self._callback)
            self.active = False


class AuthEventBus:
    """Fan-out of session created/destroyed events to subscribers."""

    def __init__(self):
        self._callbacks: List[AuthStateCallback] = []

    def subscribe(self, callback: AuthStateCallback) -> Subscription:
        self._callbacks.append(callback)
        return Subscription(self, callback)

    def _remove(self, callback: AuthStateCallback):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def emit(self, event: AuthChangeEvent, session: Optional[AuthSession]):
        """Deliver an event to every subscriber; a failing subscriber is logged."""
        for callback in list(self._callbacks):
            try:
                await callback(event, session)
            except Exception as e:
                logger.error(f"Auth state callback failed for {event}: {e}")


auth_events = AuthEventBus()

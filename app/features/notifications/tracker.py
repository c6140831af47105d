# Notifications Feature - Unseen call tracker

import asyncio
import time
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from app.config import settings
from app.core.datastore import DataStore, DataStoreError
from app.core.logging import logger
from app.core.timeutil import EPOCH, EPOCH_ISO, now_iso, parse_iso, to_iso
from app.features.notifications.schemas import CURSOR_KEYS, CallCategory
from app.features.notifications.storage import CursorStorageError, scoped_key


CALL_LOG_COLLECTION = "arama_kayit"
CATEGORY_FIELD = "arama_tipi"
TIMESTAMP_FIELD = "kayit_tarihi"


class NotificationTrackerError(Exception):
    """Raised when a tracker stopped before its first count finished."""


class NotificationTracker:
    """
    Unseen call-log counts for one identity.

    Each category has a persisted "last seen" cursor. A count is the number
    of call-log records of that category newer than its cursor. Counts are
    refreshed on a fixed interval while the tracker runs; ``clear`` moves a
    cursor to now and zeroes the count at once.

    ``keep_alive`` is asked before every scheduled refresh; when it answers
    False the poll loop ends on its own.
    """

    def __init__(
        self,
        identity_id: str,
        store: DataStore,
        storage,
        interval: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        monotonic: Callable[[], float] = time.monotonic,
        keep_alive: Optional[Callable[[], bool]] = None,
    ):
        self.identity_id = identity_id
        self.store = store
        self.storage = storage
        self.interval = settings.NOTIFICATION_POLL_INTERVAL_SECONDS if interval is None else interval
        self._sleep = sleep
        self._monotonic = monotonic
        self._keep_alive = keep_alive
        self.counts: Dict[CallCategory, int] = {category: 0 for category in CallCategory}
        self.cursors: Dict[CallCategory, str] = {category: EPOCH_ISO for category in CallCategory}
        self.ready = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def cursor_key(self, category: CallCategory) -> str:
        return scoped_key(self.identity_id, CURSOR_KEYS[category])

    def _parse_cursor(self, category: CallCategory, value: Optional[str]) -> datetime:
        if not value:
            return EPOCH
        try:
            return parse_iso(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable {category.value} cursor {value!r} for {self.identity_id}")
            return EPOCH

    async def _read_cursor(self, category: CallCategory) -> datetime:
        """Persisted cursor, never older than the one held in memory."""
        stored = self._parse_cursor(category, await self.storage.get(self.cursor_key(category)))
        cursor = max(stored, self._parse_cursor(category, self.cursors[category]))
        self.cursors[category] = to_iso(cursor)
        return cursor

    async def initialize(self):
        """Load cursors (missing ones default to the epoch) and count once."""
        try:
            for category in CallCategory:
                try:
                    await self._read_cursor(category)
                except CursorStorageError as e:
                    logger.warning(f"Could not load {category.value} cursor for {self.identity_id}: {e}")
            await self.refresh_counts()
        finally:
            self.ready.set()

    async def _count_category(self, category: CallCategory):
        try:
            cursor = await self._read_cursor(category)
            count = await self.store.count(
                CALL_LOG_COLLECTION,
                equals={CATEGORY_FIELD: category.value},
                greater_than=(TIMESTAMP_FIELD, cursor),
            )
        except (DataStoreError, CursorStorageError, ValueError) as e:
            logger.warning(f"Could not count {category.value} calls for {self.identity_id}: {e}")
            count = 0
        self.counts[category] = count or 0

    async def refresh_counts(self):
        """Recount every category independently. Never raises."""
        await asyncio.gather(*(self._count_category(category) for category in CallCategory))

    async def clear(self, category: CallCategory):
        """Mark a category as seen up to now."""
        category = CallCategory(category)
        timestamp = now_iso()
        self.cursors[category] = timestamp
        self.counts[category] = 0
        try:
            await self.storage.set(self.cursor_key(category), timestamp)
        except CursorStorageError as e:
            logger.warning(f"Could not persist {category.value} cursor for {self.identity_id}: {e}")

    async def clear_all(self):
        for category in CallCategory:
            await self.clear(category)

    def start(self):
        """Initialize and start polling. No-op when already running."""
        if self.running:
            return
        self.ready.clear()
        self._task = asyncio.create_task(self._poll())
        self._task.add_done_callback(self._poll_finished)

    def _poll_finished(self, task: asyncio.Task):
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Notification polling for {self.identity_id} failed: {task.exception()!r}")

    async def _poll(self):
        # Ticks are measured from the start so slow refreshes do not shift them
        next_tick = self._monotonic()
        await self.initialize()
        while True:
            next_tick += self.interval
            now = self._monotonic()
            if next_tick < now:
                next_tick = now
            await self._sleep(next_tick - now)
            if self._keep_alive is not None and not self._keep_alive():
                logger.info(f"No live session for {self.identity_id} - notification polling ended")
                self.counts = {category: 0 for category in CallCategory}
                return
            await self.refresh_counts()

    async def wait_ready(self):
        """
        Wait for the first count after ``start``.

        Raises:
            NotificationTrackerError: If polling ended before the first count
        """
        if self.ready.is_set():
            return
        task = self._task
        if task is None or task.done():
            raise NotificationTrackerError(f"Tracker for {self.identity_id} is not running")

        waiter = asyncio.ensure_future(self.ready.wait())
        try:
            await asyncio.wait({waiter, task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()

        if task.done() or not self.ready.is_set():
            raise NotificationTrackerError(f"Tracker for {self.identity_id} stopped before its first count")

    async def stop(self):
        """Stop polling for good and drop in-memory counts."""
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        self.counts = {category: 0 for category in CallCategory}
        self.ready.clear()

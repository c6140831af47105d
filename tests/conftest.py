"""
Shared pytest fixtures.

Sessions and rows are plain objects; nothing here talks to MongoDB.
"""

import asyncio
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.datastore import LookupResult


class FakeClock:
    """Simulated time for code that sleeps through an injected ``sleep``."""

    def __init__(self):
        self.now = 0.0
        self._sleepers = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        future = asyncio.get_running_loop().create_future()
        entry = (self.now + seconds, future)
        self._sleepers.append(entry)
        try:
            await future
        finally:
            if entry in self._sleepers:
                self._sleepers.remove(entry)

    async def settle(self, rounds: int = 50):
        """Let every runnable task proceed until it blocks again."""
        for _ in range(rounds):
            await asyncio.sleep(0)

    async def advance(self, seconds: float):
        """Move time forward, waking sleepers in deadline order."""
        target = self.now + seconds
        while True:
            await self.settle()
            due = [entry for entry in self._sleepers if entry[0] <= target and not entry[1].done()]
            if not due:
                break
            entry = min(due, key=lambda e: e[0])
            self._sleepers.remove(entry)
            self.now = entry[0]
            entry[1].set_result(None)
        self.now = target


class FakeCursorStorage:
    """Dict-backed cursor storage."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values = dict(values or {})

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str):
        self.values[key] = value


def make_session(user_id: str = "user-1", session_id: str = "session-1", expires_at: Optional[datetime] = None):
    """Stand-in for an AuthSession document."""
    if expires_at is None:
        expires_at = datetime.utcnow() + timedelta(hours=12)
    return SimpleNamespace(id=session_id, user_id=user_id, expires_at=expires_at, revoked=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cursor_storage():
    return FakeCursorStorage()


@pytest.fixture
def session():
    return make_session()


@pytest.fixture
def auth_client(session):
    """Auth client mock with a live session."""
    auth = MagicMock()
    auth.get_session = AsyncMock(return_value=session)
    auth.sign_out = AsyncMock()
    auth.on_auth_state_change = MagicMock(return_value=MagicMock())
    return auth


def table_store(tables: Dict[str, Dict[str, dict]]):
    """
    Data store mock answering ``lookup_one`` from in-memory tables.

    ``tables`` maps collection -> {row id -> row}; a value that is an
    exception instance is returned as a transient failure.
    """
    async def lookup_one(collection, equals, projection=None):
        rows = tables.get(collection, {})
        row = rows.get(equals["_id"])
        if isinstance(row, Exception):
            return LookupResult.failure(str(row))
        if row is None:
            return LookupResult.miss()
        return LookupResult.hit(row)

    store = MagicMock()
    store.lookup_one = AsyncMock(side_effect=lookup_one)
    store.count = AsyncMock(return_value=0)
    return store


@pytest.fixture
def store_factory():
    return table_store


@pytest.fixture
def session_factory():
    return make_session

"""Generic data store client.

A thin read interface over named collections of the motor database, used
by the session resolver and the notification tracker.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel
from pymongo.errors import PyMongoError

from app.database import Database
from app.core.logging import logger


class DataStoreError(Exception):
    """Raised when a data store operation fails."""


class DataStoreNotConfigured(DataStoreError):
    """Raised when no database connection is available."""


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSIENT_ERROR = "transient_error"


class LookupResult(BaseModel):
    """Outcome of a single-row lookup."""

    status: LookupStatus
    row: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @classmethod
    def hit(cls, row: Dict[str, Any]) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, row=row)

    @classmethod
    def miss(cls) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failure(cls, error: str) -> "LookupResult":
        return cls(status=LookupStatus.TRANSIENT_ERROR, error=error)


def build_filter(
    equals: Optional[Dict[str, Any]] = None,
    greater_than: Optional[Tuple[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a Mongo filter from equality and greater-than conditions."""
    query: Dict[str, Any] = dict(equals or {})
    if greater_than is not None:
        field, value = greater_than
        query[field] = {"$gt": value}
    return query


class DataStore:
    """Count and single-row lookups over named collections."""

    def __init__(self, database=None):
        self._database = database

    @property
    def db(self):
        database = self._database if self._database is not None else Database.get_database()
        if database is None:
            raise DataStoreNotConfigured("Data store is not configured")
        return database

    async def count(
        self,
        collection: str,
        equals: Optional[Dict[str, Any]] = None,
        greater_than: Optional[Tuple[str, Any]] = None,
    ) -> int:
        """Count rows matching the filters without fetching them."""
        query = build_filter(equals, greater_than)
        try:
            return await self.db[collection].count_documents(query)
        except PyMongoError as e:
            raise DataStoreError(f"count on {collection} failed: {e}") from e

    async def lookup_one(
        self,
        collection: str,
        equals: Dict[str, Any],
        projection: Optional[List[str]] = None,
    ) -> LookupResult:
        """
        Fetch a single row.

        Never raises: backend failures are reported as TRANSIENT_ERROR so
        callers can tell them apart from a row that does not exist.
        """
        try:
            row = await self.db[collection].find_one(equals, projection)
        except DataStoreNotConfigured as e:
            return LookupResult.failure(str(e))
        except PyMongoError as e:
            logger.warning(f"Lookup on {collection} failed: {e}")
            return LookupResult.failure(str(e))

        if row is None:
            return LookupResult.miss()
        return LookupResult.hit(row)


def get_datastore() -> DataStore:
    """Dependency for data store access."""
    return DataStore()

# Notifications Feature - Cursor storage

from typing import Optional

from beanie import Indexed
from beanie.exceptions import CollectionWasNotInitialized
from pymongo.errors import PyMongoError

from app.shared.models import BaseDocument, TimestampMixin


class StoredCursor(BaseDocument, TimestampMixin):
    """Durable key/value entry holding one last-seen timestamp."""

    key: Indexed(str, unique=True)
    value: str

    class Settings:
        name = "notification_cursors"
        use_state_management = True


class CursorStorageError(Exception):
    """Raised when cursor storage cannot be read or written."""


def scoped_key(identity_id: str, key: str) -> str:
    """Storage key of a cursor, scoped to one identity."""
    return f"{identity_id}:{key}"


class MongoCursorStorage:
    """Key/value cursor storage backed by the ``notification_cursors`` collection."""

    async def get(self, key: str) -> Optional[str]:
        try:
            cursor = await StoredCursor.find_one(StoredCursor.key == key)
        except (PyMongoError, CollectionWasNotInitialized) as e:
            raise CursorStorageError(f"read of {key} failed: {e}") from e
        return cursor.value if cursor else None

    async def set(self, key: str, value: str):
        try:
            cursor = await StoredCursor.find_one(StoredCursor.key == key)
            if cursor:
                cursor.value = value
                cursor.update_timestamp()
                await cursor.save()
            else:
                await StoredCursor(key=key, value=value).insert()
        except (PyMongoError, CollectionWasNotInitialized) as e:
            raise CursorStorageError(f"write of {key} failed: {e}") from e

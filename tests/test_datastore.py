"""
Tests for the generic data store client.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.core.datastore import (
    DataStore,
    DataStoreError,
    DataStoreNotConfigured,
    LookupStatus,
    build_filter,
)


def database_with(collection):
    database = MagicMock()
    database.__getitem__.return_value = collection
    return database


class TestBuildFilter:

    def test_equality_and_lower_bound(self):
        since = datetime(2025, 1, 1, tzinfo=timezone.utc)

        query = build_filter({"arama_tipi": "gelen"}, ("kayit_tarihi", since))

        assert query == {"arama_tipi": "gelen", "kayit_tarihi": {"$gt": since}}

    def test_empty_filter(self):
        assert build_filter() == {}


class TestCount:

    @pytest.mark.asyncio
    async def test_count_uses_count_documents(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(return_value=7)
        database = database_with(collection)

        result = await DataStore(database).count("arama_kayit", equals={"arama_tipi": "form"})

        assert result == 7
        database.__getitem__.assert_called_with("arama_kayit")
        collection.count_documents.assert_awaited_once_with({"arama_tipi": "form"})

    @pytest.mark.asyncio
    async def test_backend_failure_raises_datastore_error(self):
        collection = MagicMock()
        collection.count_documents = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))

        with pytest.raises(DataStoreError):
            await DataStore(database_with(collection)).count("arama_kayit")

    @pytest.mark.asyncio
    async def test_unconfigured_store_raises(self):
        with patch("app.core.datastore.Database.get_database", return_value=None):
            with pytest.raises(DataStoreNotConfigured):
                await DataStore().count("arama_kayit")


class TestLookupOne:

    @pytest.mark.asyncio
    async def test_found(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value={"_id": "u1", "doktor_id": "D1"})

        result = await DataStore(database_with(collection)).lookup_one(
            "doktor_giris", {"_id": "u1"}, ["doktor_id"]
        )

        assert result.found
        assert result.row["doktor_id"] == "D1"
        collection.find_one.assert_awaited_once_with({"_id": "u1"}, ["doktor_id"])

    @pytest.mark.asyncio
    async def test_not_found(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)

        result = await DataStore(database_with(collection)).lookup_one("admin", {"_id": "u1"})

        assert result.status == LookupStatus.NOT_FOUND
        assert not result.found

    @pytest.mark.asyncio
    async def test_backend_failure_is_transient(self):
        collection = MagicMock()
        collection.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))

        result = await DataStore(database_with(collection)).lookup_one("admin", {"_id": "u1"})

        assert result.status == LookupStatus.TRANSIENT_ERROR
        assert "down" in result.error

    @pytest.mark.asyncio
    async def test_unconfigured_store_is_transient(self):
        with patch("app.core.datastore.Database.get_database", return_value=None):
            result = await DataStore().lookup_one("admin", {"_id": "u1"})

        assert result.status == LookupStatus.TRANSIENT_ERROR

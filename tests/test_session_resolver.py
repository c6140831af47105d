"""
Tests for session/role resolution and the default landing screen.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.datastore import LookupResult
from app.features.auth.client import SessionLookupError
from app.features.session.resolver import SessionResolver
from app.features.session.routing import default_landing_screen
from app.features.session.schemas import DoctorProfile, Role, RoleOutcome


DOCTOR_TABLES = {
    "doktor_giris": {"user-1": {"_id": "user-1", "doktor_id": "D1"}},
    "doktor": {"D1": {"_id": "D1", "ad": "Ayşe", "soyad": "Yılmaz", "email": "ayse@example.com"}},
}


def collections_looked_up(store):
    return [call.args[0] for call in store.lookup_one.await_args_list]


class TestResolveSession:
    """Tests for SessionResolver.resolve_session."""

    @pytest.mark.asyncio
    async def test_no_session_yields_no_role(self, auth_client, store_factory):
        auth_client.get_session = AsyncMock(return_value=None)
        store = store_factory({})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome == RoleOutcome()
        store.lookup_one.assert_not_awaited()
        auth_client.sign_out.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_takes_precedence_over_doctor(self, auth_client, store_factory):
        store = store_factory({
            "admin": {"user-1": {"_id": "user-1"}},
            **DOCTOR_TABLES,
        })
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome.role == Role.ADMIN
        assert outcome.doctor_id is None
        assert collections_looked_up(store) == ["admin"]

    @pytest.mark.asyncio
    async def test_doctor_resolution_end_to_end(self, auth_client, store_factory):
        store = store_factory(DOCTOR_TABLES)
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome == RoleOutcome(
            role=Role.DOCTOR,
            doctor_id="D1",
            profile=DoctorProfile(ad="Ayşe", soyad="Yılmaz", email="ayse@example.com"),
        )
        assert outcome.model_dump(exclude={"transient_error"}) == {
            "role": Role.DOCTOR,
            "doctor_id": "D1",
            "profile": {"ad": "Ayşe", "soyad": "Yılmaz", "email": "ayse@example.com"},
        }
        assert default_landing_screen(outcome.role) == "appointments"
        assert resolver.outcome == outcome

    @pytest.mark.asyncio
    async def test_identity_without_role_is_signed_out_once(self, auth_client, session, store_factory):
        store = store_factory({})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome == RoleOutcome()
        auth_client.sign_out.assert_awaited_once_with(session)

    @pytest.mark.asyncio
    async def test_given_session_skips_session_lookup(self, auth_client, store_factory, session_factory):
        other = session_factory(user_id="admin-9", session_id="s-9")
        store = store_factory({"admin": {"admin-9": {"_id": "admin-9"}}})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session(other)

        assert outcome.role == Role.ADMIN
        auth_client.get_session.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_profile_failure_keeps_doctor_role(self, auth_client, store_factory):
        store = store_factory({
            "doktor_giris": DOCTOR_TABLES["doktor_giris"],
            "doktor": {"D1": ConnectionError("timeout")},
        })
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome.role == Role.DOCTOR
        assert outcome.doctor_id == "D1"
        assert outcome.profile is None
        auth_client.sign_out.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_profile_keeps_doctor_role(self, auth_client, store_factory):
        store = store_factory({"doktor_giris": DOCTOR_TABLES["doktor_giris"]})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome.role == Role.DOCTOR
        assert outcome.profile is None


class TestTransientLookupFailures:
    """A backend failure must not look like a missing role."""

    @pytest.mark.asyncio
    async def test_transient_admin_lookup_does_not_sign_out(self, auth_client, store_factory):
        store = store_factory({"admin": {"user-1": ConnectionError("network down")}})
        resolver = SessionResolver(auth_client, store, retries=2, retry_wait=0)

        outcome = await resolver.resolve_session()

        assert outcome.role is None
        assert outcome.transient_error is True
        auth_client.sign_out.assert_not_awaited()
        # First attempt plus two retries, and no fall-through to doctor lookup
        assert collections_looked_up(store) == ["admin", "admin", "admin"]

    @pytest.mark.asyncio
    async def test_transient_doctor_lookup_does_not_sign_out(self, auth_client, store_factory):
        store = store_factory({"doktor_giris": {"user-1": ConnectionError("network down")}})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome.transient_error is True
        auth_client.sign_out.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retry_recovers_from_single_failure(self, auth_client, store_factory):
        store = store_factory({})
        results = iter([ConnectionError("blip"), {"_id": "user-1"}])
        original = store.lookup_one.side_effect

        async def flaky(collection, equals, projection=None):
            if collection == "admin":
                value = next(results)
                if isinstance(value, Exception):
                    return LookupResult.failure(str(value))
                return LookupResult.hit(value)
            return await original(collection, equals, projection)

        store.lookup_one.side_effect = flaky
        resolver = SessionResolver(auth_client, store, retries=1, retry_wait=0)

        outcome = await resolver.resolve_session()

        assert outcome.role == Role.ADMIN
        assert outcome.transient_error is False

    @pytest.mark.asyncio
    async def test_unreachable_session_store_is_transient(self, auth_client, store_factory):
        auth_client.get_session = AsyncMock(side_effect=SessionLookupError("connection refused"))
        store = store_factory({})
        resolver = SessionResolver(auth_client, store, retries=0)

        outcome = await resolver.resolve_session()

        assert outcome == RoleOutcome(transient_error=True)
        store.lookup_one.assert_not_awaited()
        auth_client.sign_out.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exhausted_retries_return_last_failure(self, auth_client, store_factory):
        store = store_factory({"admin": {"user-1": ConnectionError("still down")}})
        resolver = SessionResolver(auth_client, store, retries=1, retry_wait=0)

        result = await resolver._lookup("admin", "user-1", ["_id"])

        assert result.found is False
        assert result.error == "still down"
        assert store.lookup_one.await_count == 2


class TestConcurrentResolution:

    @pytest.mark.asyncio
    async def test_last_resolution_to_finish_wins(self, auth_client, session_factory):
        admin_session = session_factory(user_id="admin-1", session_id="s-admin")
        doctor_session = session_factory(user_id="user-1", session_id="s-doctor")
        released = {"admin-1": asyncio.Event(), "user-1": asyncio.Event()}
        tables = {"admin": {"admin-1": {"_id": "admin-1"}}, **DOCTOR_TABLES}

        async def lookup_one(collection, equals, projection=None):
            if collection in ("admin", "doktor_giris"):
                await released[equals["_id"]].wait()
            row = tables.get(collection, {}).get(equals["_id"])
            return LookupResult.hit(row) if row else LookupResult.miss()

        store = MagicMock()
        store.lookup_one = AsyncMock(side_effect=lookup_one)
        resolver = SessionResolver(auth_client, store, retries=0)

        first = asyncio.create_task(resolver.resolve_session(admin_session))
        second = asyncio.create_task(resolver.resolve_session(doctor_session))
        await asyncio.sleep(0)

        released["user-1"].set()
        doctor_outcome = await second
        assert resolver.outcome == doctor_outcome

        released["admin-1"].set()
        admin_outcome = await first

        assert admin_outcome.role == Role.ADMIN
        assert doctor_outcome.role == Role.DOCTOR
        assert resolver.outcome == admin_outcome


class TestOnSessionChange:
    """Tests for SessionResolver.on_session_change."""

    @pytest.mark.asyncio
    async def test_signed_in_event_resolves_session(self, auth_client, session, store_factory):
        store = store_factory(DOCTOR_TABLES)
        resolver = SessionResolver(auth_client, store, retries=0)
        callback = AsyncMock()

        resolver.on_session_change(callback)
        handler = auth_client.on_auth_state_change.call_args.args[0]
        await handler("SIGNED_IN", session)

        outcome, event_session = callback.await_args.args
        assert outcome.role == Role.DOCTOR
        assert outcome.doctor_id == "D1"
        assert event_session is session

    @pytest.mark.asyncio
    async def test_signed_out_event_skips_lookups(self, auth_client, session, store_factory):
        store = store_factory(DOCTOR_TABLES)
        resolver = SessionResolver(auth_client, store, retries=0)
        await resolver.resolve_session()
        store.lookup_one.reset_mock()
        callback = AsyncMock()

        resolver.on_session_change(callback)
        handler = auth_client.on_auth_state_change.call_args.args[0]
        await handler("SIGNED_OUT", session)

        callback.assert_awaited_once_with(RoleOutcome(), session)
        store.lookup_one.assert_not_awaited()
        assert resolver.outcome == RoleOutcome()

    def test_returns_revocable_subscription(self, auth_client, store_factory):
        resolver = SessionResolver(auth_client, store_factory({}), retries=0)

        subscription = resolver.on_session_change(AsyncMock())

        assert subscription is auth_client.on_auth_state_change.return_value


class TestDefaultLandingScreen:

    def test_admin_lands_on_dashboard(self):
        assert default_landing_screen(Role.ADMIN) == "dashboard"

    def test_doctor_lands_on_appointments(self):
        assert default_landing_screen(Role.DOCTOR) == "appointments"

    def test_no_role_has_no_landing_screen(self):
        assert default_landing_screen(None) is None

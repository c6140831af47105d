# Dashboard Feature - Service

import asyncio
from typing import Any, Dict, Optional

from app.core.datastore import DataStore, DataStoreError
from app.core.logging import logger
from app.features.dashboard.schemas import DashboardStatsResponse
from app.features.session.schemas import CurrentUser, Role


class DashboardService:
    """Service for dashboard summary counts."""

    @staticmethod
    async def _safe_count(store: DataStore, collection: str, equals: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await store.count(collection, equals=equals)
        except DataStoreError as e:
            logger.warning(f"Dashboard count on {collection} failed: {e}")
            return 0

    @staticmethod
    async def get_dashboard_stats(current_user: CurrentUser, store: DataStore) -> DashboardStatsResponse:
        """
        Summary counts for the landing screen.

        Pending appointments are limited to the doctor's own for doctors;
        form leads are only counted for admins. A failing count reads as 0.
        """
        pending_filter: Dict[str, Any] = {"durum": "beklemede"}
        if current_user.role == Role.DOCTOR:
            pending_filter["doktor_id"] = current_user.doctor_id

        async def forms_count() -> int:
            if current_user.role != Role.ADMIN:
                return 0
            return await DashboardService._safe_count(store, "form")

        incoming_calls, pending_appointments, incoming_forms, active_doctors, pending_list_contacts = (
            await asyncio.gather(
                DashboardService._safe_count(store, "arama_kayit", {"arama_tipi": "gelen"}),
                DashboardService._safe_count(store, "randevu", pending_filter),
                forms_count(),
                DashboardService._safe_count(store, "doktor", {"aktif": True}),
                DashboardService._safe_count(store, "liste_kisi", {"arama_durumu": "bekliyor"}),
            )
        )

        return DashboardStatsResponse(
            incoming_calls=incoming_calls,
            pending_appointments=pending_appointments,
            incoming_forms=incoming_forms,
            active_doctors=active_doctors,
            pending_list_contacts=pending_list_contacts,
        )

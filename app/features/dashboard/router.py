# Dashboard Feature - Router

from fastapi import APIRouter, Depends
from app.core.datastore import DataStore, get_datastore
from app.features.auth.dependencies import get_current_user
from app.features.dashboard.schemas import DashboardStatsResponse
from app.features.dashboard.service import DashboardService
from app.features.session.schemas import CurrentUser


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    current_user: CurrentUser = Depends(get_current_user),
    store: DataStore = Depends(get_datastore),
):
    """
    Get dashboard statistics.

    Returns:
    - Incoming calls
    - Pending appointments (own appointments for doctors)
    - Web-form leads (admins only)
    - Active doctors
    - Call-list contacts waiting to be called

    Requires authentication.
    """
    return await DashboardService.get_dashboard_stats(current_user, store)

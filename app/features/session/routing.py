"""Default landing screen per role."""

from typing import Optional

from app.features.session.schemas import Role


LANDING_SCREENS = {
    Role.ADMIN: "dashboard",
    Role.DOCTOR: "appointments",
}


def default_landing_screen(role: Optional[Role]) -> Optional[str]:
    """Screen a freshly resolved session should open on."""
    if role is None:
        return None
    return LANDING_SCREENS.get(role)

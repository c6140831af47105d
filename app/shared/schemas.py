from typing import Any
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


def blank_to_none(value: Any) -> Any:
    """Trim strings; an empty result becomes None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value

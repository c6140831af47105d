from beanie import Document
from pydantic import Field
from datetime import datetime
from uuid import uuid4


def new_id() -> str:
    """Generate a string document id."""
    return str(uuid4())


class TimestampMixin:
    """Mixin for adding timestamp fields to documents."""

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def update_timestamp(self):
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()


class BaseDocument(Document):
    """Base document with a string UUID primary key."""

    id: str = Field(default_factory=new_id)

    class Settings:
        use_state_management = True

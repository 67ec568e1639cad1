# backend/boothmedia/models/notification_model.py
"""
Notification model - the externally visible status badge of a job.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..enums import NotificationStatus


class Notification(BaseModel):
    """Ephemeral status record for one job. ``id`` equals the job id."""

    id: str
    concept_name: str = Field("", description="Concept label shown on the badge")
    thumbnail: str = Field("", description="Concept thumbnail shown on the badge")
    status: NotificationStatus = NotificationStatus.PROCESSING
    original_missing: bool = Field(
        False,
        description="Set when an originals destination was configured but the raw capture was not stored",
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

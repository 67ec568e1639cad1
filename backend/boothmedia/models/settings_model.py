# backend/boothmedia/models/settings_model.py
"""
Booth settings models.

These mirror what the settings/events collaborator returns. Wire names are
camelCase; Python attributes are snake_case.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..constants import DEFAULT_OUTPUT_DIMENSIONS, OUTPUT_DIMENSIONS
from ..enums import BoothMode, OutputRatio, ProcessingMode
from .concept_model import Concept


class BoothEvent(BaseModel):
    """An event (party, activation) the booth can be attached to."""

    id: str
    name: str = ""
    description: str = ""
    folder_id: str = ""
    is_active: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class BoothSettings(BaseModel):
    """Runtime booth configuration consumed read-only by the core."""

    event_name: str = ""
    event_description: str = ""
    active_event_id: Optional[str] = None
    folder_id: str = Field("", description="Primary upload destination")
    original_folder_id: str = Field(
        "", description="Destination for raw captures; blank disables the step"
    )
    overlay_image: Optional[str] = Field(None, description="Branding overlay reference")
    output_ratio: OutputRatio = OutputRatio.PORTRAIT
    booth_mode: BoothMode = BoothMode.PHOTO
    processing_mode: ProcessingMode = ProcessingMode.FAST
    image_model: Optional[str] = None
    concepts: List[Concept] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    @property
    def has_original_destination(self) -> bool:
        return bool(self.original_folder_id and self.original_folder_id.strip())

    @property
    def video_enabled(self) -> bool:
        return self.booth_mode is BoothMode.VIDEO

    def output_dimensions(self) -> Tuple[int, int]:
        """Return (width, height) of the final composite for the output ratio."""
        return OUTPUT_DIMENSIONS.get(self.output_ratio, DEFAULT_OUTPUT_DIMENSIONS)

    def with_active_event(self, event: BoothEvent) -> "BoothSettings":
        """Return a copy pointing uploads at ``event``."""
        return self.model_copy(
            update={
                "event_name": event.name,
                "event_description": event.description,
                "folder_id": event.folder_id,
                "active_event_id": event.id,
            }
        )

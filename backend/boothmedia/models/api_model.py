# backend/boothmedia/models/api_model.py
"""
HTTP boundary models for the capture, notification and video endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..enums import NotificationStatus


class CaptureSubmission(BaseModel):
    """Kiosk capture handed off for background processing."""

    image: str = Field(..., description="Captured image as data-URI or bare base64")
    concept_id: str = Field(..., description="Selected concept id")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CaptureAccepted(BaseModel):
    ok: bool = True
    job_id: str
    status: NotificationStatus = NotificationStatus.PROCESSING

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoGenerationRequest(BaseModel):
    """Body of POST /api/video/generate. Field names match the kiosk client."""

    prompt: Optional[str] = None
    image_base64: Optional[str] = None
    drive_file_id: Optional[str] = None
    session_folder_id: Optional[str] = None
    model: Optional[str] = None
    resolution: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class VideoGenerationResponse(BaseModel):
    ok: bool = True
    task_id: str
    status: NotificationStatus = NotificationStatus.PROCESSING
    message: str = "Video generation started"

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TickReport(BaseModel):
    """Summary returned by the external queue after each poll."""

    processed: int = 0
    started: int = 0

    model_config = ConfigDict(extra="allow")

    @property
    def has_activity(self) -> bool:
        return self.processed > 0 or self.started > 0

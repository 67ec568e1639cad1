"""
Pydantic models for the booth media core.
"""

from .api_model import (
    CaptureAccepted,
    CaptureSubmission,
    TickReport,
    VideoGenerationRequest,
    VideoGenerationResponse,
)
from .concept_model import Concept
from .generation_model import GenerationRequest, VideoTaskRequest
from .job_model import Job
from .notification_model import Notification
from .settings_model import BoothEvent, BoothSettings
from .upload_model import UploadMetadata, UploadResult

__all__ = [
    "BoothEvent",
    "BoothSettings",
    "CaptureAccepted",
    "CaptureSubmission",
    "Concept",
    "GenerationRequest",
    "Job",
    "Notification",
    "TickReport",
    "UploadMetadata",
    "UploadResult",
    "VideoGenerationRequest",
    "VideoGenerationResponse",
    "VideoTaskRequest",
]

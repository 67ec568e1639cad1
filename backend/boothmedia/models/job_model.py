# backend/boothmedia/models/job_model.py
"""
Job model - one capture travelling through the background pipeline.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .concept_model import Concept
from .settings_model import BoothSettings


def _new_job_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Job(BaseModel):
    """A single capture owned by the orchestrator until it is terminal."""

    id: str = Field(default_factory=_new_job_id)
    source_image: str = Field(..., description="Captured image as data-URI, URL or bare base64")
    concept: Concept
    settings: BoothSettings = Field(..., description="Settings snapshot taken at submission")
    created_at: datetime = Field(default_factory=_utc_now)

# backend/boothmedia/models/upload_model.py
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadMetadata(BaseModel):
    """Labels and destination attached to an upload."""

    concept_name: str
    event_name: str = ""
    event_id: Optional[str] = None
    folder_id: str = ""
    original_id: Optional[str] = None
    skip_gallery: Optional[bool] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResult(BaseModel):
    """Storage collaborator reply. ``id`` is stable once ``ok`` is true."""

    ok: bool = False
    id: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

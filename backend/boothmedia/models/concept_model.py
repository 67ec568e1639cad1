# backend/boothmedia/models/concept_model.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Concept(BaseModel):
    """Selectable style preset shown on the themes screen."""

    id: str = Field(..., description="Concept identifier")
    name: str = Field(..., description="Display name, also used as upload label")
    prompt: str = Field("", description="Generation prompt for this concept")
    thumbnail: str = Field("", description="Thumbnail URL shown in notifications")
    reference_images: List[str] = Field(
        default_factory=list,
        description="Extra image references sent after the captured image",
    )

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

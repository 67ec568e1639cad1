# backend/boothmedia/models/generation_model.py
"""
Generation models - request bodies sent to the upstream generation API.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..constants import (
    ARK_DEFAULT_VIDEO_DURATION,
    ARK_DEFAULT_VIDEO_RESOLUTION,
    ARK_IMAGE_SIZE,
    ARK_RESPONSE_FORMAT,
)


class GenerationRequest(BaseModel):
    """
    Body of an image generation call.

    ``image`` holds references that have already been normalized to either an
    absolute URL or a data-URI.
    """

    model: str
    prompt: str
    image: Optional[List[str]] = None
    response_format: str = ARK_RESPONSE_FORMAT
    size: str = ARK_IMAGE_SIZE
    stream: bool = False
    watermark: bool = True
    sequential_image_generation: Literal["disabled", "auto"] = "disabled"

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class VideoTaskRequest(BaseModel):
    """Body of an asynchronous video task creation call."""

    model: str
    prompt: str
    image_url: Optional[str] = None
    duration: int = Field(ARK_DEFAULT_VIDEO_DURATION, ge=1, le=30)
    resolution: str = ARK_DEFAULT_VIDEO_RESOLUTION

    def to_payload(self) -> Dict[str, Any]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": self.prompt}]
        if self.image_url:
            content.append({"type": "image_url", "image_url": {"url": self.image_url}})

        return {
            "model": self.model,
            "content": content,
            "parameters": {
                "duration": self.duration,
                "resolution": self.resolution,
                "audio": False,
            },
        }

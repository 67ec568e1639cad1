#!/usr/bin/env python3
# backend/tests/conftest.py
"""
Pytest configuration and shared fixtures for booth media tests.
"""

import base64
import io
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
from PIL import Image as PILImage

from boothmedia.enums import BoothMode, OutputRatio
from boothmedia.models.concept_model import Concept
from boothmedia.models.settings_model import BoothSettings


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: fast isolated unit tests")
    config.addinivalue_line("markers", "worker: tests for background workers")
    config.addinivalue_line(
        "markers", "integration: tests that drive the HTTP application end to end"
    )


def make_image_bytes(
    size=(64, 48), color=(200, 30, 30, 255), fmt: str = "PNG", mode: str = "RGBA"
) -> bytes:
    """Encode a solid-colour test image."""
    image = PILImage.new(mode, size, color if mode == "RGBA" else color[:3])
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_data_uri(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: Optional[str] = None,
    content: bytes = b"",
    headers: Optional[dict] = None,
) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = content
    response.headers = headers if headers is not None else {"content-type": "application/json"}
    if text is None:
        text = "" if json_data is None else str(json_data)
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def png_bytes():
    """A small opaque PNG."""
    return make_image_bytes(color=(10, 120, 220, 255))


@pytest.fixture
def overlay_png_bytes():
    """A half-transparent overlay PNG."""
    return make_image_bytes(size=(90, 160), color=(255, 255, 255, 128))


@pytest.fixture
def sample_concept():
    return Concept(
        id="retro",
        name="Retro Pop",
        prompt="Turn the subject into a retro pop-art poster",
        thumbnail="https://example.com/thumbs/retro.jpg",
        reference_images=["https://example.com/refs/retro-style.jpg"],
    )


@pytest.fixture
def booth_settings(sample_concept):
    return BoothSettings(
        event_name="Launch Party",
        active_event_id="evt-1",
        folder_id="folder-final",
        output_ratio=OutputRatio.PORTRAIT,
        booth_mode=BoothMode.PHOTO,
        image_model="seedream-4-0-250828",
        concepts=[sample_concept],
    )


@pytest.fixture
def image_factory():
    return make_image_bytes


@pytest.fixture
def data_uri_factory():
    return make_data_uri


@pytest.fixture
def response_factory():
    return make_response

# backend/boothmedia/services/compositor.py
"""
Image Compositor - final raster composition for booth outputs.

Scales the generated image to cover the output surface and blends the
branding overlay on top. Composition is fail-open: if anything goes wrong the
caller receives the base image bytes unchanged so the booth keeps working
without branding.
"""

import io
import math
import os
import tempfile
from typing import Optional, Tuple

import requests
from loguru import logger
from PIL import Image as PILImage

from ..constants import (
    COMPOSITE_FORMAT,
    COMPOSITE_JPEG_QUALITY,
    OVERLAY_DOWNLOAD_CHUNK_SIZE,
)
from ..utils.image_refs import decode_image_reference, get_drive_direct_link, is_http_url


def cover_scale(base_size: Tuple[int, int], width: int, height: int) -> tuple:
    """
    Compute the scaled size that makes ``base_size`` cover a ``width`` x
    ``height`` surface, and the top-left corner of the centered crop.

    Returns:
        ((scaled_width, scaled_height), (crop_left, crop_top))
    """
    base_width, base_height = base_size
    scale = max(width / base_width, height / base_height)
    scaled_width = max(width, math.ceil(base_width * scale))
    scaled_height = max(height, math.ceil(base_height * scale))
    crop_left = (scaled_width - width) // 2
    crop_top = (scaled_height - height) // 2
    return (scaled_width, scaled_height), (crop_left, crop_top)


class ImageCompositor:
    """
    Composes the final booth image.

    The requests session is injectable so tests can substitute a mock.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        quality: int = COMPOSITE_JPEG_QUALITY,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.quality = quality
        self.session = session or requests.Session()

    def compose(
        self,
        base: bytes,
        overlay_ref: Optional[str],
        width: int,
        height: int,
    ) -> bytes:
        """
        Compose ``base`` onto a ``width`` x ``height`` surface with an optional overlay.

        Args:
            base: Encoded base image (the generation result)
            overlay_ref: Overlay URL, Drive share link or data-URI
            width: Output width in pixels
            height: Output height in pixels

        Returns:
            JPEG bytes of the composite, or ``base`` unchanged on any failure
        """
        try:
            surface = PILImage.new("RGBA", (width, height), (0, 0, 0, 255))

            with PILImage.open(io.BytesIO(base)) as base_image:
                base_rgba = base_image.convert("RGBA")
            size, (left, top) = cover_scale(base_rgba.size, width, height)
            scaled = base_rgba.resize(size, PILImage.Resampling.LANCZOS)
            surface.alpha_composite(scaled.crop((left, top, left + width, top + height)))

            if overlay_ref and overlay_ref.strip():
                overlay = self._load_overlay(get_drive_direct_link(overlay_ref.strip()))
                self._draw_overlay(surface, overlay)

            output = io.BytesIO()
            surface.convert("RGB").save(
                output, format=COMPOSITE_FORMAT, quality=self.quality
            )
            logger.debug(f"Composite encoded at {width}x{height} (quality={self.quality})")
            return output.getvalue()

        except Exception as e:
            logger.error(f"Canvas composition error, returning base image: {e}")
            return base

    def _draw_overlay(self, surface: PILImage.Image, overlay: PILImage.Image) -> None:
        stretched = overlay.convert("RGBA").resize(surface.size, PILImage.Resampling.LANCZOS)
        surface.alpha_composite(stretched)

    def _load_overlay(self, reference: str) -> PILImage.Image:
        if not (reference.startswith("data:") or is_http_url(reference)):
            raise ValueError("Overlay must be an http(s) URL or a data-URI")
        try:
            return self.load_overlay_direct(reference)
        except Exception as e:
            logger.warning(f"Direct overlay load failed ({e}), trying standard fetch...")
            return self.load_overlay_via_tempfile(reference)

    def load_overlay_direct(self, reference: str) -> PILImage.Image:
        """
        Load the overlay in memory from an http(s) URL or a data-URI.

        Raises:
            ValueError: If the reference is neither a URL nor a data-URI
            Exception: Any fetch or decode error
        """
        if reference.startswith("data:"):
            data = decode_image_reference(reference)
        elif is_http_url(reference):
            response = self.session.get(
                reference,
                timeout=self.timeout,
                headers={"Accept": "image/*"},
            )
            response.raise_for_status()
            data = response.content
        else:
            raise ValueError("Overlay must be an http(s) URL or a data-URI")

        image = PILImage.open(io.BytesIO(data))
        image.load()
        return image

    def load_overlay_via_tempfile(self, reference: str) -> PILImage.Image:
        """
        Stream the overlay into a temporary file and decode it from disk.

        The temporary file is removed whether or not decoding succeeds.
        """
        fd, temp_path = tempfile.mkstemp(prefix="booth_overlay_", suffix=".img")
        try:
            with os.fdopen(fd, "wb") as handle:
                with self.session.get(reference, timeout=self.timeout, stream=True) as response:
                    response.raise_for_status()
                    for chunk in response.iter_content(chunk_size=OVERLAY_DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            handle.write(chunk)

            with PILImage.open(temp_path) as image:
                image.load()
                return image.copy()
        finally:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass

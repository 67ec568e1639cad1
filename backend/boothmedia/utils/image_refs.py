# backend/boothmedia/utils/image_refs.py
"""
Image Reference Utilities - helpers for the string forms images travel in.

A reference is one of: an http(s) URL, a ``data:`` URI, or (from the kiosk
camera) a bare base64 payload.
"""

import base64
import binascii
import re
from typing import Optional

from ..constants import (
    BARE_PAYLOAD_DATA_URI_PREFIX,
    DATA_URI_IMAGE_MARKER,
    GOOGLE_DRIVE_DIRECT_LINK,
    GOOGLE_DRIVE_DOWNLOAD_LINK,
    HTTP_SCHEMES,
)

_DRIVE_ID_PATTERNS = (
    re.compile(r"id=([a-zA-Z0-9_-]+)"),
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
)


def is_http_url(reference: str) -> bool:
    return reference.startswith(HTTP_SCHEMES)


def is_image_data_uri(reference: str) -> bool:
    return reference.startswith(DATA_URI_IMAGE_MARKER)


def decode_image_reference(reference: str) -> bytes:
    """
    Decode a data-URI or bare base64 payload into raw bytes.

    Args:
        reference: ``data:image/...;base64,...`` string or bare base64

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the payload is not valid base64
    """
    payload = reference.strip()
    if payload.startswith("data:"):
        header, sep, payload = payload.partition(",")
        if not sep or ";base64" not in header:
            raise ValueError("Only base64 data URIs are supported")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image payload: {e}")


def encode_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    """Wrap raw bytes as a base64 data-URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def strip_bare_payload_prefix(reference: str) -> str:
    """Inverse of the bare-payload wrapping done for upstream requests."""
    if reference.startswith(BARE_PAYLOAD_DATA_URI_PREFIX):
        return reference[len(BARE_PAYLOAD_DATA_URI_PREFIX):]
    return reference


def extract_drive_file_id(url: str) -> Optional[str]:
    for pattern in _DRIVE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def get_drive_direct_link(url: Optional[str]) -> str:
    """
    Turn a Google Drive share link into a direct CDN (lh3) link.

    Data URIs and URLs without a recognizable file id pass through unchanged.
    """
    if not url:
        return ""
    if url.startswith("data:"):
        return url

    file_id = extract_drive_file_id(url)
    if file_id:
        return GOOGLE_DRIVE_DIRECT_LINK.format(file_id=file_id)
    return url


def get_drive_download_link(file_id: str) -> str:
    return GOOGLE_DRIVE_DOWNLOAD_LINK.format(file_id=file_id)


def guess_image_mime(data: bytes) -> str:
    """Best-effort MIME type from magic bytes; defaults to JPEG."""
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"

# backend/boothmedia/services/generation/response_shapes.py
"""
Response Shapes - decode the result URL out of an upstream success body.

ModelArk-compatible endpoints do not agree on where the generated image URL
lives. Each known layout has a matcher below; ``RESPONSE_SHAPES`` fixes the
order they are tried in. The first matcher returning a non-empty string wins.
"""

import json
from typing import Any, Callable, List, Optional, Tuple

from loguru import logger

from ...constants import EXTRACTION_DIAGNOSTIC_LIMIT
from ...exceptions import ExtractionError

ShapeMatcher = Callable[[Any], Optional[str]]


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _data(body: Any) -> Any:
    return body.get("data") if isinstance(body, dict) else None


def _first_item(body: Any) -> Any:
    data = _data(body)
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return None


def match_namespaced_url_array(body: Any) -> Optional[str]:
    """``{"data": {"image_urls": ["..."]}}`` (Seedream)."""
    data = _data(body)
    if isinstance(data, dict):
        urls = data.get("image_urls")
        if isinstance(urls, list) and urls:
            return _non_empty_str(urls[0])
    return None


def match_url_object_array(body: Any) -> Optional[str]:
    """``{"data": [{"url": "..."}]}`` (OpenAI-compatible)."""
    item = _first_item(body)
    return _non_empty_str(item.get("url")) if item else None


def match_image_url_object_array(body: Any) -> Optional[str]:
    """``{"data": [{"image_url": "..."}]}``."""
    item = _first_item(body)
    return _non_empty_str(item.get("image_url")) if item else None


def match_flat_url_object(body: Any) -> Optional[str]:
    """``{"data": {"url": "..."}}``."""
    data = _data(body)
    return _non_empty_str(data.get("url")) if isinstance(data, dict) else None


def match_root_image_url(body: Any) -> Optional[str]:
    """``{"image_url": "..."}``."""
    return _non_empty_str(body.get("image_url")) if isinstance(body, dict) else None


RESPONSE_SHAPES: List[Tuple[str, ShapeMatcher]] = [
    ("namespaced_url_array", match_namespaced_url_array),
    ("url_object_array", match_url_object_array),
    ("image_url_object_array", match_image_url_object_array),
    ("flat_url_object", match_flat_url_object),
    ("root_image_url", match_root_image_url),
]


def diagnostic_dump(body: Any, limit: int = EXTRACTION_DIAGNOSTIC_LIMIT) -> str:
    """Serialize ``body`` for logs, truncated to ``limit`` characters."""
    try:
        text = json.dumps(body, default=str)
    except (TypeError, ValueError):
        text = repr(body)
    return text[:limit]


def extract_result_url(body: Any) -> str:
    """
    Return the generated image URL from an upstream response body.

    Args:
        body: Parsed JSON body of a successful generation call

    Returns:
        The result URL

    Raises:
        ExtractionError: If no known shape matches
    """
    for shape_name, matcher in RESPONSE_SHAPES:
        url = matcher(body)
        if url:
            logger.debug(f"Result URL extracted using shape '{shape_name}'")
            return url

    dump = diagnostic_dump(body)
    logger.error(f"Unexpected generation response structure: {dump}")
    raise ExtractionError(
        "No image URL found in upstream response. Check logs for structure.",
        diagnostic=dump,
    )

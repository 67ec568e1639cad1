"""
Upstream generation client and response decoding.
"""

from .ark_client import ArkClient, normalize_image_input
from .response_shapes import RESPONSE_SHAPES, extract_result_url

__all__ = [
    "ArkClient",
    "RESPONSE_SHAPES",
    "extract_result_url",
    "normalize_image_input",
]

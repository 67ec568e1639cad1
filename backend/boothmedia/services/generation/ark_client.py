# backend/boothmedia/services/generation/ark_client.py
"""
BytePlus ModelArk API Client

Talks to the generative endpoints used by the booth:
- Image generation (Seedream) via /images/generations
- Asynchronous video tasks (Seedance) via /contents/generations/tasks

Outgoing image references are normalized before they leave this module so the
upstream only ever sees absolute URLs or data-URIs. Responses are decoded by
the ordered shape matchers in ``response_shapes``.

All methods are blocking; async callers run them in an executor.
"""

from typing import List, Optional, Sequence

import requests
from loguru import logger

from ...constants import (
    ARK_DEFAULT_VIDEO_DURATION,
    ARK_DEFAULT_VIDEO_RESOLUTION,
    ARK_IMAGE_GENERATIONS_PATH,
    ARK_VIDEO_TASKS_PATH,
    BARE_PAYLOAD_DATA_URI_PREFIX,
    BARE_PAYLOAD_MIN_LENGTH,
    UPSTREAM_LOG_BODY_LIMIT,
)
from ...exceptions import ExtractionError, UpstreamError, ValidationError
from ...models.generation_model import GenerationRequest, VideoTaskRequest
from ...utils.image_refs import is_http_url, is_image_data_uri
from .response_shapes import diagnostic_dump, extract_result_url


def normalize_image_input(reference: Optional[str], index: int = 0) -> str:
    """
    Normalize one image reference to an absolute URL or a data-URI.

    Rules are applied in order and the first match wins:

    1. ``http://`` / ``https://`` URL - passed through.
    2. ``data:image/...`` URI - passed through.
    3. Longer than 100 characters with no whitespace - assumed to be a bare
       base64 payload and wrapped as ``data:image/png;base64,<payload>``.
       This is a heuristic: any long whitespace-free string qualifies.
    4. Anything else is rejected.

    Args:
        reference: Raw reference from the caller
        index: Position in the request, used in messages

    Returns:
        Normalized reference

    Raises:
        ValidationError: If the reference is empty or unrecognized
    """
    if not reference or not reference.strip():
        raise ValidationError(f"Image input at index {index} is empty.")

    trimmed = reference.strip()
    preview = trimmed[:40].replace("\n", "")

    if is_http_url(trimmed):
        logger.debug(f"[ARK] Image {index}: URL detected ({preview}...)")
        return trimmed

    if is_image_data_uri(trimmed):
        logger.debug(f"[ARK] Image {index}: data URI detected (len={len(trimmed)})")
        return trimmed

    if len(trimmed) > BARE_PAYLOAD_MIN_LENGTH and not any(ch.isspace() for ch in trimmed):
        logger.debug(
            f"[ARK] Image {index}: bare base64 detected, wrapping (len={len(trimmed)})"
        )
        return f"{BARE_PAYLOAD_DATA_URI_PREFIX}{trimmed}"

    raise ValidationError(
        f"Invalid image input at index {index}. "
        "Must be http(s) URL or valid data:image/... URI."
    )


class ArkClient:
    """
    Client for the ModelArk generation API.

    The session is injectable so tests can substitute a mock.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. ``https://ark.ap-southeast.bytepluses.com/api/v3``
            api_key: Bearer token
            timeout: Per-request timeout in seconds
            session: Optional pre-built requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

        if not api_key:
            logger.warning("ARK API key is not set; upstream calls will be rejected")

    def build_generation_request(
        self, images: Sequence[str], prompt: str, model: str
    ) -> GenerationRequest:
        """Normalize ``images`` and assemble the request body."""
        normalized: Optional[List[str]] = None
        if images:
            normalized = [normalize_image_input(img, i) for i, img in enumerate(images)]
        return GenerationRequest(model=model, prompt=prompt, image=normalized)

    def generate(self, images: Sequence[str], prompt: str, model: str) -> str:
        """
        Generate an image and return its URL.

        Args:
            images: Ordered image references (captured image first)
            prompt: Concept prompt
            model: Seedream model name

        Returns:
            URL of the generated image

        Raises:
            ValidationError: If an image reference is empty or unrecognized
            UpstreamError: If the upstream call fails
            ExtractionError: If the success body holds no known URL shape
        """
        request = self.build_generation_request(images, prompt, model)
        body = self._post_json(ARK_IMAGE_GENERATIONS_PATH, request.to_payload(), "seedream")
        return extract_result_url(body)

    def start_video_task(
        self,
        model: str,
        prompt: str,
        image_url: Optional[str] = None,
        duration: int = ARK_DEFAULT_VIDEO_DURATION,
        resolution: str = ARK_DEFAULT_VIDEO_RESOLUTION,
    ) -> str:
        """
        Start an asynchronous video generation task.

        Returns:
            Opaque upstream task id

        Raises:
            ValidationError: If ``image_url`` is not a URL, data-URI or bare payload
            UpstreamError: If the upstream call fails
            ExtractionError: If no task id is returned
        """
        request = VideoTaskRequest(
            model=model,
            prompt=prompt,
            image_url=normalize_image_input(image_url) if image_url else None,
            duration=duration,
            resolution=resolution,
        )
        body = self._post_json(ARK_VIDEO_TASKS_PATH, request.to_payload(), "seedance")

        task_id = None
        if isinstance(body, dict):
            result = body.get("Result")
            task_id = body.get("id") or (result.get("id") if isinstance(result, dict) else None)

        if not task_id:
            raise ExtractionError(
                "No Task ID returned from upstream", diagnostic=diagnostic_dump(body)
            )
        return str(task_id)

    def _post_json(self, path: str, payload: dict, service: str):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"[ARK {service}] Request failed: {e}")
            raise UpstreamError(None, str(e), service=service) from e

        if not response.ok:
            text = response.text
            logger.error(
                f"[ARK {service}] Error {response.status_code}: {text[:UPSTREAM_LOG_BODY_LIMIT]}"
            )
            raise UpstreamError(response.status_code, text, service=service)

        try:
            return response.json()
        except ValueError as e:
            raise ExtractionError(
                f"Upstream {service} returned a non-JSON body",
                diagnostic=diagnostic_dump(response.text),
            ) from e

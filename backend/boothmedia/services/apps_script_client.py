# backend/boothmedia/services/apps_script_client.py
"""
Apps Script Client - remote storage and settings collaborator.

The booth's Google Apps Script web app fronts Drive (image storage), the
settings sheet, the events sheet and the spreadsheet-backed video task queue.
Every call is a single JSON request; replies carry an ``ok`` flag.

All methods are blocking; async callers run them in an executor.
"""

from typing import Any, Dict, List, Optional, Tuple

import requests
from loguru import logger

from ..constants import (
    APPS_SCRIPT_ACTION_GET_EVENTS,
    APPS_SCRIPT_ACTION_GET_SETTINGS,
    APPS_SCRIPT_ACTION_UPDATE_VIDEO_STATUS,
    APPS_SCRIPT_ACTION_UPLOAD,
    UPSTREAM_LOG_BODY_LIMIT,
)
from ..exceptions import UploadError, UpstreamError
from ..models.concept_model import Concept
from ..models.settings_model import BoothEvent
from ..models.upload_model import UploadMetadata, UploadResult
from ..utils.image_refs import encode_data_uri


class AppsScriptClient:
    """Client for the booth's Apps Script web app."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def upload(
        self, image: bytes, metadata: UploadMetadata, mime_type: str = "image/jpeg"
    ) -> UploadResult:
        """
        Upload image bytes to the destination folder in ``metadata``.

        Args:
            image: Encoded image bytes
            metadata: Labels and destination
            mime_type: MIME type used for the embedded data-URI

        Returns:
            UploadResult as reported by the collaborator

        Raises:
            UploadError: If the request fails or the reply cannot be read
        """
        payload = {
            "action": APPS_SCRIPT_ACTION_UPLOAD,
            "image": encode_data_uri(image, mime_type),
            **metadata.model_dump(by_alias=True, exclude_none=True),
        }

        try:
            body = self._post(payload)
        except UpstreamError as e:
            raise UploadError(f"Upload to folder '{metadata.folder_id}' failed: {e}") from e

        try:
            result = UploadResult.model_validate(body)
        except ValueError as e:
            raise UploadError(f"Unreadable upload reply: {e}") from e

        if result.ok:
            logger.info(
                f"Uploaded '{metadata.concept_name}' to folder {metadata.folder_id} (id={result.id})"
            )
        else:
            logger.warning(
                f"Storage rejected '{metadata.concept_name}': {result.error or 'no reason given'}"
            )
        return result

    # ------------------------------------------------------------------
    # Settings / events
    # ------------------------------------------------------------------

    def fetch_settings(self) -> Tuple[Dict[str, Any], List[Concept]]:
        """
        Fetch global settings and the concept list.

        Returns:
            (raw settings dict, concepts)

        Raises:
            UpstreamError: If the request fails or ``ok`` is false
        """
        body = self._get(APPS_SCRIPT_ACTION_GET_SETTINGS)
        if not isinstance(body, dict) or not body.get("ok"):
            raise UpstreamError(None, str(body)[:UPSTREAM_LOG_BODY_LIMIT], service="apps-script")

        settings = body.get("settings") or {}
        concepts_raw = body.get("concepts")
        concepts = (
            [Concept.model_validate(c) for c in concepts_raw]
            if isinstance(concepts_raw, list)
            else []
        )
        return settings, concepts

    def fetch_events(self) -> List[BoothEvent]:
        """Fetch the event list. Raises UpstreamError on failure."""
        body = self._get(APPS_SCRIPT_ACTION_GET_EVENTS)
        if isinstance(body, dict):
            events = body.get("events") or []
        elif isinstance(body, list):
            events = body
        else:
            events = []
        return [BoothEvent.model_validate(e) for e in events]

    # ------------------------------------------------------------------
    # Video task queue
    # ------------------------------------------------------------------

    def update_video_status(
        self, photo_id: str, task_id: str, video_model: str, status: str = "processing"
    ) -> None:
        """Register an upstream video task against a photo row in the queue sheet."""
        self._post(
            {
                "action": APPS_SCRIPT_ACTION_UPDATE_VIDEO_STATUS,
                "photoId": photo_id,
                "status": status,
                "taskId": task_id,
                "videoModel": video_model,
            }
        )
        logger.info(f"Queued video task {task_id} for photo {photo_id}")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(self, action: str) -> Any:
        return self._request("GET", params={"action": action})

    def _post(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", json=payload)

    def _request(self, method: str, **kwargs) -> Any:
        if not self.configured:
            raise UpstreamError(None, "Apps Script base URL is not configured", service="apps-script")

        try:
            response = self.session.request(method, self.base_url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise UpstreamError(None, str(e), service="apps-script") from e

        if not response.ok:
            raise UpstreamError(
                response.status_code,
                response.text[:UPSTREAM_LOG_BODY_LIMIT],
                service="apps-script",
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                response.status_code,
                f"Non-JSON reply: {response.text[:UPSTREAM_LOG_BODY_LIMIT]}",
                service="apps-script",
            ) from e

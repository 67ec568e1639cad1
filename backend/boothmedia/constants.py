# backend/boothmedia/constants.py
"""
Global Constants for the booth media core.

Centralized location for all application constants to avoid hardcoded values
throughout the codebase.
"""

from typing import Dict, Tuple

from .enums import OutputRatio

# =============================================================================
# NOTIFICATIONS
# =============================================================================

NOTIFICATION_CAPACITY = 5
NOTIFICATION_EXPIRE_SECONDS = 10.0

# =============================================================================
# COMPOSITION
# =============================================================================

OUTPUT_DIMENSIONS: Dict[OutputRatio, Tuple[int, int]] = {
    OutputRatio.PORTRAIT: (1080, 1920),
    OutputRatio.LANDSCAPE: (1920, 1080),
    OutputRatio.CLASSIC_LANDSCAPE: (1800, 1200),
    OutputRatio.CLASSIC_PORTRAIT: (1200, 1800),
}
DEFAULT_OUTPUT_DIMENSIONS = OUTPUT_DIMENSIONS[OutputRatio.PORTRAIT]

COMPOSITE_JPEG_QUALITY = 92
COMPOSITE_FORMAT = "JPEG"
OVERLAY_DOWNLOAD_CHUNK_SIZE = 64 * 1024

# =============================================================================
# IMAGE REFERENCES
# =============================================================================

DATA_URI_IMAGE_MARKER = "data:image/"
BARE_PAYLOAD_DATA_URI_PREFIX = "data:image/png;base64,"
BARE_PAYLOAD_MIN_LENGTH = 100
HTTP_SCHEMES = ("http://", "https://")

GOOGLE_DRIVE_DIRECT_LINK = "https://lh3.googleusercontent.com/d/{file_id}"
GOOGLE_DRIVE_DOWNLOAD_LINK = "https://drive.google.com/uc?export=download&id={file_id}"

# =============================================================================
# UPSTREAM GENERATION (BytePlus ModelArk)
# =============================================================================

ARK_IMAGE_GENERATIONS_PATH = "/images/generations"
ARK_VIDEO_TASKS_PATH = "/contents/generations/tasks"
ARK_IMAGE_SIZE = "2K"
ARK_RESPONSE_FORMAT = "url"
ARK_DEFAULT_VIDEO_DURATION = 5
ARK_DEFAULT_VIDEO_RESOLUTION = "480p"
ARK_DEFAULT_VIDEO_PROMPT = "Cinematic movement"

EXTRACTION_DIAGNOSTIC_LIMIT = 1200
UPSTREAM_LOG_BODY_LIMIT = 500

# =============================================================================
# REMOTE STORAGE / SETTINGS COLLABORATOR (Apps Script web app)
# =============================================================================

APPS_SCRIPT_ACTION_UPLOAD = "uploadImage"
APPS_SCRIPT_ACTION_GET_SETTINGS = "getSettings"
APPS_SCRIPT_ACTION_GET_EVENTS = "getEvents"
APPS_SCRIPT_ACTION_UPDATE_VIDEO_STATUS = "updateVideoStatus"

ORIGINAL_CAPTURE_CONCEPT_NAME = "ORIGINAL_CAPTURE"

# =============================================================================
# WORKERS
# =============================================================================

VIDEO_TICK_INTERVAL_SECONDS = 5.0
JSON_CONTENT_TYPE = "application/json"

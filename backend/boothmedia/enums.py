# backend/boothmedia/enums.py
"""
Application Enums - Centralized enum definitions.

Kept separate from constants.py and the models package so both can import
them without creating circular dependencies.
"""

from enum import Enum


# =============================================================================
# JOB / NOTIFICATION SYSTEMS
# =============================================================================


class NotificationStatus(str, Enum):
    """Status of a background job as surfaced to the kiosk."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not NotificationStatus.PROCESSING


# =============================================================================
# BOOTH CONFIGURATION
# =============================================================================


class OutputRatio(str, Enum):
    """Output aspect ratios supported by the compositor."""

    PORTRAIT = "9:16"
    LANDSCAPE = "16:9"
    CLASSIC_LANDSCAPE = "3:2"
    CLASSIC_PORTRAIT = "2:3"


class BoothMode(str, Enum):
    """Capability mode of the booth. Video mode enables the task ticker."""

    PHOTO = "photo"
    VIDEO = "video"


class ProcessingMode(str, Enum):
    """How the kiosk waits for results: fast hands off to the background."""

    FAST = "fast"
    NORMAL = "normal"


# =============================================================================
# LOGGING
# =============================================================================


class LogLevel(str, Enum):
    """Log levels accepted by configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

"""
Services module for the booth media core.

Available Services:
- ArkClient: Upstream image generation and video task submission
- ImageCompositor: Cover-fit resize and branding overlay composition
- NotificationRegistry: Bounded, self-expiring job status collection
- AppsScriptClient: Remote storage, settings and video queue collaborator
- BoothSettingsService: Current booth settings snapshot and refresh
"""

from .apps_script_client import AppsScriptClient
from .booth_settings_service import BoothSettingsService
from .compositor import ImageCompositor
from .generation import ArkClient, normalize_image_input
from .notification_registry import NotificationRegistry

__all__ = [
    "AppsScriptClient",
    "ArkClient",
    "BoothSettingsService",
    "ImageCompositor",
    "NotificationRegistry",
    "normalize_image_input",
]

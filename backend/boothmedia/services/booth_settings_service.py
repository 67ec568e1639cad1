# backend/boothmedia/services/booth_settings_service.py
"""
Booth Settings Service - read-only snapshot of the settings collaborator.

The snapshot starts from environment defaults and is replaced wholesale on
every successful refresh, so readers never see a half-merged state. A failed
refresh keeps the previous snapshot.
"""

from typing import Optional

from loguru import logger

from ..config import Settings
from ..exceptions import UpstreamError
from ..models.concept_model import Concept
from ..models.settings_model import BoothSettings
from .apps_script_client import AppsScriptClient


class BoothSettingsService:
    """Holds the current BoothSettings and refreshes it from Apps Script."""

    def __init__(self, client: AppsScriptClient, defaults: Optional[BoothSettings] = None):
        self.client = client
        self._current = defaults or BoothSettings()

    @classmethod
    def from_settings(cls, client: AppsScriptClient, settings: Settings) -> "BoothSettingsService":
        defaults = BoothSettings(
            booth_mode=settings.booth_mode,
            output_ratio=settings.output_ratio,
            image_model=settings.image_model,
        )
        return cls(client, defaults)

    @property
    def current(self) -> BoothSettings:
        return self._current

    def find_concept(self, concept_id: str) -> Optional[Concept]:
        return next((c for c in self._current.concepts if c.id == concept_id), None)

    def refresh(self) -> bool:
        """
        Pull settings, concepts and the active event.

        Returns:
            True if the snapshot was replaced
        """
        if not self.client.configured:
            logger.debug("Settings collaborator not configured, keeping defaults")
            return False

        try:
            raw_settings, concepts = self.client.fetch_settings()
            merged = self._current.model_dump()
            merged.update(BoothSettings.model_validate(raw_settings).model_dump(exclude_unset=True))
            if concepts:
                merged["concepts"] = concepts
            updated = BoothSettings.model_validate(merged)

            events = self.client.fetch_events()
            active = next((e for e in events if e.is_active), None)
            if active:
                updated = updated.with_active_event(active)

        except (UpstreamError, ValueError) as e:
            logger.warning(f"Cloud sync error, keeping previous settings: {e}")
            return False

        self._current = updated
        logger.info(
            f"Settings refreshed (event='{updated.event_name}', mode={updated.booth_mode.value}, "
            f"concepts={len(updated.concepts)})"
        )
        return True

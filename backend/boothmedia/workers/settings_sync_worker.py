# backend/boothmedia/workers/settings_sync_worker.py
from ..services.booth_settings_service import BoothSettingsService
from .base_worker import PeriodicWorker


class SettingsSyncWorker(PeriodicWorker):
    """Periodically refreshes the booth settings snapshot."""

    def __init__(self, settings_service: BoothSettingsService, interval: float):
        super().__init__(
            name="SettingsSyncWorker", interval=interval, run_immediately=False
        )
        self.settings_service = settings_service

    async def tick(self) -> None:
        await self.run_in_executor(self.settings_service.refresh)

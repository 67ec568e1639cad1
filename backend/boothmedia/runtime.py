# backend/boothmedia/runtime.py
"""
Booth runtime - the process-scoped handle for all shared state.

Owns the notification registry, the external clients, and the workers. The
FastAPI lifespan creates one runtime, starts it, and stops it on shutdown;
routers reach it through ``dependencies.get_runtime``.
"""

from typing import Any, Dict, Optional

from loguru import logger

from .config import Settings
from .services.apps_script_client import AppsScriptClient
from .services.booth_settings_service import BoothSettingsService
from .services.compositor import ImageCompositor
from .services.generation.ark_client import ArkClient
from .services.notification_registry import NotificationRegistry
from .workers.base_worker import BaseWorker
from .workers.job_orchestrator import JobOrchestrator
from .workers.settings_sync_worker import SettingsSyncWorker
from .workers.video_tick_worker import VideoTickWorker


class BoothRuntime:
    """Explicit init/teardown lifecycle around the booth's shared state."""

    def __init__(
        self,
        settings: Settings,
        registry: Optional[NotificationRegistry] = None,
        ark_client: Optional[ArkClient] = None,
        apps_script: Optional[AppsScriptClient] = None,
        compositor: Optional[ImageCompositor] = None,
    ):
        self.settings = settings
        timeout = settings.http_timeout_seconds

        self.registry = registry or NotificationRegistry()
        self.ark_client = ark_client or ArkClient(
            settings.ark_base_url, settings.ark_api_key, timeout=timeout
        )
        self.apps_script = apps_script or AppsScriptClient(
            settings.apps_script_base_url, timeout=timeout
        )
        self.compositor = compositor or ImageCompositor(timeout=timeout)
        self.booth_settings = BoothSettingsService.from_settings(self.apps_script, settings)

        self.orchestrator = JobOrchestrator(
            registry=self.registry,
            ark_client=self.ark_client,
            compositor=self.compositor,
            storage=self.apps_script,
            settings_provider=lambda: self.booth_settings.current,
            default_image_model=settings.image_model,
            timeout=timeout,
        )
        self.video_ticker = VideoTickWorker(
            tick_url=settings.video_tick_url,
            is_enabled=lambda: self.booth_settings.current.video_enabled,
            timeout=timeout,
        )
        self.settings_sync = SettingsSyncWorker(
            self.booth_settings, interval=settings.settings_refresh_interval
        )

        self.started = False

    @property
    def workers(self) -> Dict[str, BaseWorker]:
        return {
            "orchestrator": self.orchestrator,
            "video_ticker": self.video_ticker,
            "settings_sync": self.settings_sync,
        }

    async def start(self) -> None:
        """Load settings and start all workers."""
        if self.started:
            return
        await self.orchestrator.run_in_executor(self.booth_settings.refresh)
        for worker in self.workers.values():
            await worker.start()
        self.started = True
        logger.info("Booth runtime started")

    async def stop(self) -> None:
        """Stop workers and drop volatile state. In-flight jobs are not aborted."""
        if not self.started:
            return
        for worker in reversed(list(self.workers.values())):
            try:
                await worker.stop()
            except Exception as e:
                logger.error(f"Error stopping {worker.name}: {e}")
        self.registry.clear()
        self.started = False
        logger.info("Booth runtime stopped")

    def get_status(self) -> Dict[str, Any]:
        return {
            "started": self.started,
            "notifications": len(self.registry),
            "workers": {key: w.get_status() for key, w in self.workers.items()},
        }

"""
Worker module for the booth media core.

- JobOrchestrator: Background capture -> generation -> composite -> upload jobs
- VideoTickWorker: Periodic poke of the external video queue
- SettingsSyncWorker: Periodic refresh of booth settings

All workers share the BaseWorker lifecycle (start/stop, prefixed logging,
executor offloading for blocking calls).
"""

from .base_worker import BaseWorker, PeriodicWorker
from .job_orchestrator import JobOrchestrator
from .settings_sync_worker import SettingsSyncWorker
from .video_tick_worker import VideoTickWorker

__all__ = [
    "BaseWorker",
    "PeriodicWorker",
    "JobOrchestrator",
    "SettingsSyncWorker",
    "VideoTickWorker",
]

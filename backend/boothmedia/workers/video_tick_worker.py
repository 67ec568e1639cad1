# backend/boothmedia/workers/video_tick_worker.py
"""
Video Tick Worker - advances external video generation tasks.

The external queue (a spreadsheet-backed task list) owns all task state and
retry semantics. This worker only nudges it: one idempotent GET per period
while the booth is in video mode. Misses are never escalated; a malformed
reply, an empty body or a network error simply waits for the next period.
"""

from typing import Callable, Optional

import requests

from ..constants import JSON_CONTENT_TYPE, VIDEO_TICK_INTERVAL_SECONDS
from ..models.api_model import TickReport
from .base_worker import PeriodicWorker


class VideoTickWorker(PeriodicWorker):
    """Polls the external video task queue on a fixed period."""

    def __init__(
        self,
        tick_url: str,
        is_enabled: Callable[[], bool],
        interval: float = VIDEO_TICK_INTERVAL_SECONDS,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            tick_url: Poll endpoint of the external queue
            is_enabled: Returns True while the video capability is on
            interval: Seconds between polls
            timeout: Request timeout in seconds
            session: Optional requests session (injectable for tests)
        """
        super().__init__(name="VideoTickWorker", interval=interval)
        self.tick_url = tick_url
        self.is_enabled = is_enabled
        self.timeout = timeout
        self.session = session or requests.Session()

    async def tick(self) -> None:
        if not self.is_enabled():
            return

        report = await self.run_in_executor(self.poll_once)
        if report is not None and report.has_activity:
            self.log_info(
                f"Global tick report: processed={report.processed}, started={report.started}"
            )

    def poll_once(self) -> Optional[TickReport]:
        """
        Issue one poll and interpret the reply.

        Returns:
            The report, or None if the reply is not a well-formed JSON report
        """
        try:
            response = self.session.get(self.tick_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.log_debug(f"Tick poll failed: {e}")
            return None

        content_type = response.headers.get("content-type") or ""
        if not response.ok or JSON_CONTENT_TYPE not in content_type:
            return None

        try:
            data = response.json()
            report = data.get("report") if isinstance(data, dict) else None
            if not isinstance(report, dict):
                return None
            return TickReport.model_validate(report)
        except ValueError:
            return None

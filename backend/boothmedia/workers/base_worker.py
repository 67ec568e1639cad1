# backend/boothmedia/workers/base_worker.py
"""
Base worker class for the booth media workers.

Provides the shared lifecycle and logging helpers. Two kinds of worker build
on it:

1. Pipeline workers (JobOrchestrator) - no loop of their own; they spawn one
   task per submitted job.
2. Periodic workers (VideoTickWorker, SettingsSyncWorker) - run a fixed
   interval loop between start() and stop() via PeriodicWorker.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from loguru import logger


class BaseWorker(ABC):
    """
    Abstract base class for all booth workers.

    Each worker is responsible for a specific domain of functionality.
    """

    def __init__(self, name: str):
        """
        Initialize base worker.

        Args:
            name: Worker name for logging and identification
        """
        self.name = name
        self.running = False

    async def start(self) -> None:
        """Start the worker."""
        logger.info(f"Starting {self.name} worker")
        self.running = True
        await self.initialize()

    async def stop(self) -> None:
        """Stop the worker."""
        logger.info(f"Stopping {self.name} worker")
        self.running = False
        await self.cleanup()

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize worker-specific resources."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup worker-specific resources."""
        pass

    def log_info(self, message: str) -> None:
        """Log info message with worker name prefix."""
        logger.info(f"[{self.name}] {message}")

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        """Log error message with worker name prefix."""
        if error:
            logger.error(f"[{self.name}] {message}: {error}")
        else:
            logger.error(f"[{self.name}] {message}")

    def log_warning(self, message: str) -> None:
        """Log warning message with worker name prefix."""
        logger.warning(f"[{self.name}] {message}")

    def log_debug(self, message: str) -> None:
        """Log debug message with worker name prefix."""
        logger.debug(f"[{self.name}] {message}")

    async def run_in_executor(self, func, *args) -> Any:
        """Run a blocking function in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def get_status(self) -> Dict[str, Any]:
        """
        Get current worker status.

        Returns:
            Dictionary with worker status information
        """
        return {
            "name": self.name,
            "running": self.running,
            "worker_type": self.__class__.__name__,
        }


class PeriodicWorker(BaseWorker):
    """
    Worker that calls ``tick()`` once per ``interval`` seconds while running.

    Ticks are scheduled against fixed monotonic deadlines, so the time a tick
    takes does not stretch the period. Ticks never overlap: periods whose
    deadline passed while a tick was still running are skipped.

    The first tick happens immediately on start unless ``run_immediately`` is
    False. Errors escaping ``tick()`` are logged and the loop continues on the
    next period.
    """

    def __init__(self, name: str, interval: float, run_immediately: bool = True):
        super().__init__(name)
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.run_immediately = run_immediately
        self._task: Optional[asyncio.Task] = None

    @abstractmethod
    async def tick(self) -> None:
        """Perform one period's work."""
        pass

    async def initialize(self) -> None:
        if self._task and not self._task.done():
            self.log_warning("Loop already running")
            return
        self._task = asyncio.create_task(self._run_loop(), name=f"{self.name}-loop")
        self.log_info(f"Loop started (interval: {self.interval}s)")

    async def cleanup(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _run_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        if not self.run_immediately:
            next_run += self.interval

        while self.running:
            delay = next_run - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)

            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.log_error("Error in periodic loop", e)

            next_run += self.interval
            now = loop.time()
            if next_run < now:
                skipped = math.ceil((now - next_run) / self.interval)
                next_run += skipped * self.interval
                self.log_debug(f"Tick overran, skipping {skipped} period(s)")

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status["interval"] = self.interval
        return status

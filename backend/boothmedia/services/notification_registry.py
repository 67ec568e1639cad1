# backend/boothmedia/services/notification_registry.py
"""
Notification Registry - bounded, self-expiring job status badges.

Holds at most ``capacity`` notifications, newest first. Adding beyond
capacity evicts the oldest entry whatever its status, so a newer capture can
push out a job that is still processing.

All methods must be called from the event loop thread. Jobs only ever write
their own entry, so interleaved updates from concurrent jobs need no lock.
"""

import asyncio
from typing import Dict, List, Optional

from loguru import logger

from ..constants import NOTIFICATION_CAPACITY, NOTIFICATION_EXPIRE_SECONDS
from ..enums import NotificationStatus
from ..models.notification_model import Notification


class NotificationRegistry:
    """Process-scoped collection of job notifications."""

    def __init__(
        self,
        capacity: int = NOTIFICATION_CAPACITY,
        expire_after: float = NOTIFICATION_EXPIRE_SECONDS,
    ):
        """
        Args:
            capacity: Maximum number of notifications kept
            expire_after: Default seconds a terminal notification stays visible
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.expire_after = expire_after
        self._entries: List[Notification] = []
        self._expiry_handles: Dict[str, asyncio.TimerHandle] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, notification: Notification) -> None:
        """
        Insert ``notification`` at the front, evicting the oldest beyond capacity.

        Re-adding an id replaces its entry and cancels its pending expiry. A
        terminal entry is frozen and is not replaced.
        """
        existing = self.get(notification.id)
        if existing is not None:
            if existing.is_terminal:
                logger.warning(
                    f"Ignoring re-add of terminal notification {notification.id} "
                    f"({existing.status.value})"
                )
                return
            self._cancel_expiry(notification.id)

        self._entries = [n for n in self._entries if n.id != notification.id]
        self._entries.insert(0, notification)

        while len(self._entries) > self.capacity:
            evicted = self._entries.pop()
            self._cancel_expiry(evicted.id)
            logger.debug(
                f"Notification {evicted.id} evicted at capacity (status={evicted.status.value})"
            )

    def get(self, notification_id: str) -> Optional[Notification]:
        return next((n for n in self._entries if n.id == notification_id), None)

    def update(self, notification_id: str, status: NotificationStatus, **changes) -> bool:
        """
        Move a notification to ``status``.

        Terminal notifications are frozen; updating one, or an id that was
        evicted or expired, is a no-op.

        Returns:
            True if the notification was updated
        """
        for index, current in enumerate(self._entries):
            if current.id != notification_id:
                continue
            if current.is_terminal:
                logger.warning(
                    f"Ignoring update of terminal notification {notification_id} "
                    f"({current.status.value} -> {status.value})"
                )
                return False
            self._entries[index] = current.model_copy(update={"status": status, **changes})
            return True
        return False

    def schedule_expire(self, notification_id: str, delay: Optional[float] = None) -> None:
        """Remove ``notification_id`` after ``delay`` seconds (default ``expire_after``)."""
        delay = self.expire_after if delay is None else delay
        loop = asyncio.get_running_loop()
        self._cancel_expiry(notification_id)
        self._expiry_handles[notification_id] = loop.call_later(
            delay, self._expire, notification_id
        )

    def remove(self, notification_id: str) -> bool:
        self._cancel_expiry(notification_id)
        before = len(self._entries)
        self._entries = [n for n in self._entries if n.id != notification_id]
        return len(self._entries) < before

    def list(self) -> List[Notification]:
        """Snapshot of current notifications, newest first."""
        return list(self._entries)

    def clear(self) -> None:
        """Drop all notifications and cancel pending expiry timers."""
        for handle in self._expiry_handles.values():
            handle.cancel()
        self._expiry_handles.clear()
        self._entries.clear()

    def _expire(self, notification_id: str) -> None:
        self._expiry_handles.pop(notification_id, None)
        if self.remove(notification_id):
            logger.debug(f"Notification {notification_id} expired")

    def _cancel_expiry(self, notification_id: str) -> None:
        handle = self._expiry_handles.pop(notification_id, None)
        if handle is not None:
            handle.cancel()

#!/usr/bin/env python3
"""
Unit tests for NotificationRegistry capacity, status and expiry rules.
"""

import asyncio

import pytest

from boothmedia.enums import NotificationStatus
from boothmedia.models.notification_model import Notification
from boothmedia.services.notification_registry import NotificationRegistry


def _notification(job_id: str, status=NotificationStatus.PROCESSING) -> Notification:
    return Notification(id=job_id, concept_name=f"Concept {job_id}", status=status)


@pytest.mark.unit
class TestNotificationRegistry:
    @pytest.fixture
    def registry(self):
        return NotificationRegistry(capacity=5, expire_after=0.05)

    def test_newest_first(self, registry):
        for job_id in ("a", "b", "c"):
            registry.add(_notification(job_id))
        assert [n.id for n in registry.list()] == ["c", "b", "a"]

    def test_sixth_insertion_evicts_oldest(self, registry):
        for i in range(6):
            registry.add(_notification(f"job-{i}"))

        ids = [n.id for n in registry.list()]
        assert len(registry) == 5
        assert ids == ["job-5", "job-4", "job-3", "job-2", "job-1"]
        assert registry.get("job-0") is None

    def test_eviction_ignores_status(self, registry):
        registry.add(_notification("still-processing"))
        for i in range(5):
            registry.add(_notification(f"done-{i}", NotificationStatus.COMPLETED))
        assert registry.get("still-processing") is None

    def test_update_of_evicted_job_is_noop(self, registry):
        for i in range(6):
            registry.add(_notification(f"job-{i}"))
        assert registry.update("job-0", NotificationStatus.COMPLETED) is False
        assert len(registry) == 5

    def test_readding_same_id_does_not_duplicate(self, registry):
        registry.add(_notification("a"))
        registry.add(_notification("b"))
        registry.add(_notification("a"))
        assert [n.id for n in registry.list()] == ["a", "b"]

    def test_update_applies_status_and_changes(self, registry):
        registry.add(_notification("a"))
        assert registry.update("a", NotificationStatus.COMPLETED, original_missing=True)
        entry = registry.get("a")
        assert entry.status is NotificationStatus.COMPLETED
        assert entry.original_missing is True

    @pytest.mark.parametrize(
        "terminal", [NotificationStatus.COMPLETED, NotificationStatus.FAILED]
    )
    def test_terminal_status_is_frozen(self, registry, terminal):
        registry.add(_notification("a"))
        registry.update("a", terminal)

        assert registry.update("a", NotificationStatus.PROCESSING) is False
        assert registry.update("a", NotificationStatus.FAILED) is False
        assert registry.get("a").status is terminal

    def test_list_returns_snapshot(self, registry):
        registry.add(_notification("a"))
        snapshot = registry.list()
        registry.add(_notification("b"))
        assert [n.id for n in snapshot] == ["a"]

    def test_production_defaults(self):
        registry = NotificationRegistry()
        assert registry.capacity == 5
        assert registry.expire_after == 10.0

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            NotificationRegistry(capacity=0)

    @pytest.mark.asyncio
    async def test_expires_only_after_delay(self, registry):
        registry.add(_notification("a"))
        registry.update("a", NotificationStatus.COMPLETED)
        registry.schedule_expire("a", delay=0.1)

        await asyncio.sleep(0.03)
        assert registry.get("a") is not None

        await asyncio.sleep(0.15)
        assert registry.get("a") is None

    @pytest.mark.asyncio
    async def test_default_delay_is_expire_after(self, registry):
        registry.add(_notification("a"))
        registry.schedule_expire("a")
        await asyncio.sleep(0.12)
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_rescheduling_replaces_pending_timer(self, registry):
        registry.add(_notification("a"))
        registry.schedule_expire("a", delay=0.02)
        registry.schedule_expire("a", delay=0.2)
        await asyncio.sleep(0.08)
        assert registry.get("a") is not None

    @pytest.mark.asyncio
    async def test_clear_cancels_timers(self, registry):
        registry.add(_notification("a"))
        registry.schedule_expire("a", delay=0.02)
        registry.clear()
        registry.add(_notification("a"))
        await asyncio.sleep(0.06)
        assert registry.get("a") is not None

    @pytest.mark.asyncio
    async def test_evicted_entry_timer_is_cancelled(self):
        registry = NotificationRegistry(capacity=1, expire_after=0.02)
        registry.add(_notification("old"))
        registry.schedule_expire("old")
        registry.add(_notification("new"))
        registry.add(_notification("old"))
        await asyncio.sleep(0.06)
        assert registry.get("old") is not None

    @pytest.mark.asyncio
    async def test_readding_processing_entry_cancels_its_timer(self, registry):
        registry.add(_notification("a"))
        registry.schedule_expire("a", delay=0.02)
        registry.add(_notification("a"))
        await asyncio.sleep(0.06)
        assert registry.get("a") is not None

    @pytest.mark.asyncio
    async def test_terminal_entry_is_not_replaced_and_still_expires(self, registry):
        registry.add(_notification("a"))
        registry.update("a", NotificationStatus.FAILED)
        registry.schedule_expire("a", delay=0.05)

        registry.add(_notification("a"))
        assert registry.get("a").status is NotificationStatus.FAILED

        await asyncio.sleep(0.1)
        assert registry.get("a") is None

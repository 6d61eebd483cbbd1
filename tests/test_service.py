"""Tests for PingService: boot, config-change, delete and alarm-fired triggers."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from randoping.adapters.alarms import InMemoryAlarmRegistrar
from randoping.adapters.clock import FixedClock, SequenceRandomSource
from randoping.domain.models import Cancel, InvalidConfiguration, PingConfig, Schedule
from randoping.domain.scheduler import PingScheduler
from randoping.service import PingService, UnknownPing

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    async def send(self, config):
        self.sent.append(config.id)


@pytest.fixture
def rng():
    return SequenceRandomSource([0.2, 0.4, 0.6, 0.8])


@pytest.fixture
def registrar():
    return InMemoryAlarmRegistrar()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def service(rng, registrar, notifier):
    scheduler = PingScheduler(clock=FixedClock(NOW), rng=rng)
    return PingService(scheduler, registrar, notifier)


def daytime(id, enabled=True):
    # Quiet window far from NOW so fire times are never shifted
    return PingConfig(id=id, avg_minutes=30, quiet_start_hour=1, quiet_end_hour=2, enabled=enabled)


class TestBoot:
    def test_schedules_enabled_cancels_disabled(self, service, registrar):
        decisions = service.on_boot([daytime("a"), daytime("b", enabled=False), daytime("c")])
        assert [type(d) for d in decisions] == [Schedule, Cancel, Schedule]
        assert set(registrar.pending()) == {"a", "c"}
        assert {c.id for c in service.list_configs()} == {"a", "b", "c"}

    def test_replaces_previous_set(self, service, registrar):
        service.on_boot([daytime("old")])
        service.on_boot([daytime("new")])
        assert set(registrar.pending()) == {"new"}
        with pytest.raises(UnknownPing):
            service.get_config("old")

    def test_rejects_duplicate_ids(self, service):
        with pytest.raises(InvalidConfiguration, match="duplicate"):
            service.on_boot([daytime("a"), daytime("a")])

    def test_rejects_invalid_before_scheduling(self, service, registrar):
        with pytest.raises(InvalidConfiguration):
            service.on_boot([daytime("a"), PingConfig(id="bad", avg_minutes=0)])
        assert registrar.pending() == {}
        assert service.list_configs() == []


class TestConfigChanged:
    def test_new_config_scheduled(self, service, registrar):
        decision = service.on_config_changed(daytime("a"))
        assert isinstance(decision, Schedule)
        assert registrar.pending() == {"a": decision.fire_at}

    def test_disable_cancels(self, service, registrar):
        service.on_config_changed(daytime("a"))
        decision = service.on_config_changed(daytime("a", enabled=False))
        assert decision == Cancel("a")
        assert registrar.pending() == {}
        assert service.get_config("a").enabled is False

    def test_reenable_uses_fresh_time(self, service, registrar):
        first = service.on_config_changed(daytime("a"))
        service.on_config_changed(daytime("a", enabled=False))
        second = service.on_config_changed(daytime("a"))
        assert second.fire_at != first.fire_at
        assert registrar.pending() == {"a": second.fire_at}

    def test_invalid_rejected(self, service):
        with pytest.raises(InvalidConfiguration):
            service.on_config_changed(PingConfig(id="a", quiet_end_hour=24))
        assert service.list_configs() == []


class TestConfigDeleted:
    def test_delete_cancels_and_removes(self, service, registrar):
        service.on_config_changed(daytime("a"))
        assert service.on_config_deleted("a") == Cancel("a")
        assert registrar.pending() == {}
        assert service.list_configs() == []

    def test_delete_unknown(self, service):
        with pytest.raises(UnknownPing):
            service.on_config_deleted("nope")


class TestAlarmFired:
    @pytest.mark.asyncio
    async def test_notifies_and_reschedules(self, service, registrar, notifier):
        first = service.on_config_changed(daytime("a"))
        decision = await service.on_alarm_fired("a")
        assert notifier.sent == ["a"]
        assert isinstance(decision, Schedule)
        assert decision.fire_at != first.fire_at
        assert registrar.pending() == {"a": decision.fire_at}

    @pytest.mark.asyncio
    async def test_unknown_id_ignored(self, service, registrar, notifier):
        assert await service.on_alarm_fired("ghost") is None
        assert notifier.sent == []
        assert registrar.pending() == {}

    @pytest.mark.asyncio
    async def test_disabled_does_not_notify(self, service, registrar, notifier):
        service.on_config_changed(daytime("a", enabled=False))
        decision = await service.on_alarm_fired("a")
        assert decision == Cancel("a")
        assert notifier.sent == []
        assert registrar.pending() == {}

    @pytest.mark.asyncio
    async def test_notifier_failure_still_reschedules(self, rng, registrar, capsys):
        notifier = AsyncMock()
        notifier.send.side_effect = RuntimeError("offline")
        scheduler = PingScheduler(clock=FixedClock(NOW), rng=rng)
        service = PingService(scheduler, registrar, notifier)
        service.on_config_changed(daytime("a"))

        decision = await service.on_alarm_fired("a")

        assert isinstance(decision, Schedule)
        assert "notification failed" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_without_notifier(self, rng, registrar):
        scheduler = PingScheduler(clock=FixedClock(NOW), rng=rng)
        service = PingService(scheduler, registrar)
        service.on_config_changed(daytime("a"))
        assert isinstance(await service.on_alarm_fired("a"), Schedule)


class ExplodingScheduler(PingScheduler):
    def decide_schedule_action(self, config, now=None):
        raise OverflowError("date value out of range")

    def schedule_all(self, configs, now=None):
        raise OverflowError("date value out of range")


class TestFailedDecisionLeavesStateUnchanged:
    def test_huge_mean_rejected_before_storing(self, service, registrar):
        with pytest.raises(InvalidConfiguration, match="avg_minutes"):
            service.on_config_changed(PingConfig(id="a", avg_minutes=1e10))
        assert service.list_configs() == []
        assert registrar.pending() == {}

    def test_config_changed_stores_only_after_decision(self, rng, registrar):
        service = PingService(ExplodingScheduler(clock=FixedClock(NOW), rng=rng), registrar)
        with pytest.raises(OverflowError):
            service.on_config_changed(daytime("a"))
        assert service.list_configs() == []
        assert registrar.pending() == {}

    def test_boot_keeps_previous_set_when_decisions_fail(self, rng, registrar):
        service = PingService(PingScheduler(clock=FixedClock(NOW), rng=rng), registrar)
        service.on_boot([daytime("old")])
        service._scheduler = ExplodingScheduler(clock=FixedClock(NOW), rng=rng)
        with pytest.raises(OverflowError):
            service.on_boot([daytime("new")])
        assert [c.id for c in service.list_configs()] == ["old"]
        assert set(registrar.pending()) == {"old"}

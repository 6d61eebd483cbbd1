"""Ping service: boot, config-change and alarm-fired triggers.

Holds the active configuration set in memory, asks PingScheduler for a
decision and hands it to the alarm registrar.
"""

import sys
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from randoping.domain.models import (
    Cancel,
    InvalidConfiguration,
    PingConfig,
    Schedule,
    ScheduleAction,
    validate_config,
)
from randoping.domain.scheduler import PingScheduler
from randoping.ports.outbound import AlarmRegistrarPort, NotificationPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class UnknownPing(KeyError):
    """Raised when a trigger names a config id outside the active set."""


class PingService:
    def __init__(
        self,
        scheduler: PingScheduler,
        registrar: AlarmRegistrarPort,
        notifier: Optional[NotificationPort] = None,
    ):
        self._scheduler = scheduler
        self._registrar = registrar
        self._notifier = notifier
        self._configs: Dict[str, PingConfig] = {}

    @property
    def scheduler(self) -> PingScheduler:
        return self._scheduler

    # ── accessors ──────────────────────────────────────────

    def list_configs(self) -> List[PingConfig]:
        return list(self._configs.values())

    def get_config(self, config_id: str) -> PingConfig:
        try:
            return self._configs[config_id]
        except KeyError:
            raise UnknownPing(config_id)

    def pending(self) -> Dict[str, datetime]:
        return self._registrar.pending()

    # ── triggers ───────────────────────────────────────────

    def on_boot(self, configs: Iterable[PingConfig]) -> List[ScheduleAction]:
        """Replace the active set and (re)schedule every config in it."""
        configs = list(configs)
        seen = set()
        for config in configs:
            validate_config(config)
            if config.id in seen:
                raise InvalidConfiguration(f"duplicate ping id: {config.id!r}")
            seen.add(config.id)

        # Decide everything before touching the active set or the registrar.
        decisions = self._scheduler.schedule_all(configs)

        for stale_id in set(self._configs) - seen:
            self._registrar.cancel(stale_id)
        self._configs = {c.id: c for c in configs}
        for decision in decisions:
            self.apply(decision)
        scheduled = sum(1 for d in decisions if isinstance(d, Schedule))
        _log(f"[PingService] boot: {len(decisions)} ping(s), {scheduled} scheduled")
        return decisions

    def on_config_changed(self, config: PingConfig) -> ScheduleAction:
        """Add or replace one config and reschedule it (or cancel if disabled)."""
        validate_config(config)
        decision = self._scheduler.decide_schedule_action(config)
        self._configs[config.id] = config
        self.apply(decision)
        return decision

    def on_config_deleted(self, config_id: str) -> Cancel:
        if config_id not in self._configs:
            raise UnknownPing(config_id)
        del self._configs[config_id]
        decision = Cancel(config_id)
        self.apply(decision)
        return decision

    async def on_alarm_fired(self, config_id: str) -> Optional[ScheduleAction]:
        """Show the ping if still enabled, then schedule the next one."""
        config = self._configs.get(config_id)
        if config is None:
            _log(f"[PingService] alarm for unknown ping {config_id}, ignoring")
            return None

        if config.enabled and self._notifier is not None:
            try:
                await self._notifier.send(config)
            except Exception as e:
                _log(f"[PingService] {config_id}: notification failed: {e}")

        decision = self._scheduler.decide_schedule_action(config)
        self.apply(decision)
        return decision

    def apply(self, decision: ScheduleAction) -> None:
        if isinstance(decision, Schedule):
            self._registrar.register(decision.config_id, decision.fire_at)
        else:
            self._registrar.cancel(decision.config_id)

"""Ping scheduler: exponential inter-ping gaps with quiet-hours blackout.

Pure domain logic. Time and randomness come in through ClockPort and
RandomSourcePort, so every result is deterministic given those inputs.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from randoping.domain.models import Cancel, PingConfig, Schedule, ScheduleAction
from randoping.ports.outbound import ClockPort, RandomSourcePort


def exponential_sample(mean: float, u: float) -> float:
    """Inverse-CDF transform of a uniform sample u in [0, 1)."""
    return -mean * math.log(1.0 - u)


def in_quiet_hours(hour: int, config: PingConfig) -> bool:
    start, end = config.quiet_start_hour, config.quiet_end_hour
    if config.quiet_window_wraps:
        # Window spans midnight, e.g. 22:00 to 08:00
        return hour >= start or hour < end
    return start <= hour < end


class PingScheduler:
    """Computes next fire times and enable/disable decisions for ping configs.

    Stateless across calls: safe to share and to call concurrently for
    different configs.
    """

    def __init__(
        self,
        clock: Optional[ClockPort] = None,
        rng: Optional[RandomSourcePort] = None,
    ):
        if clock is None or rng is None:
            from randoping.adapters.clock import SystemClock, SystemRandomSource

            clock = clock or SystemClock()
            rng = rng or SystemRandomSource()
        self._clock = clock
        self._rng = rng

    @property
    def clock(self) -> ClockPort:
        return self._clock

    def exponential_delay(self, mean: float) -> float:
        """Draw a delay in minutes with the given mean.

        The exponential is the memoryless distribution: the expected wait
        until the next ping does not depend on how long ago the last one was.
        """
        return exponential_sample(mean, self._rng.random())

    def compute_next_fire_time(
        self, config: PingConfig, now: Optional[datetime] = None
    ) -> datetime:
        """Next fire time for an enabled config.

        Callers check config.enabled first; a disabled config should be
        cancelled, not scheduled.
        """
        if now is None:
            now = self._clock.now()
        delay = self.exponential_delay(float(config.avg_minutes))
        candidate = now + timedelta(minutes=delay)
        return self.adjust_for_quiet_hours(candidate, config)

    def adjust_for_quiet_hours(self, timestamp: datetime, config: PingConfig) -> datetime:
        """Push a timestamp inside quiet hours to quiet_end_hour:00 local time.

        The result moves to the next day whenever the original hour is
        >= quiet_start_hour. For a non-wrapping window that is every in-window
        hour, so those always land on the following day.
        """
        local = self._clock.to_local(timestamp)
        hour = local.hour
        if not in_quiet_hours(hour, config):
            return timestamp

        # Wall-clock arithmetic, then let the clock attach the offset in effect
        # at the new local time.
        wall = local.replace(
            tzinfo=None, hour=config.quiet_end_hour, minute=0, second=0, microsecond=0
        )
        if hour >= config.quiet_start_hour:
            wall = wall + timedelta(days=1)
        return self._clock.to_local(wall)

    def decide_schedule_action(
        self, config: PingConfig, now: Optional[datetime] = None
    ) -> ScheduleAction:
        if not config.enabled:
            return Cancel(config.id)
        return Schedule(config.id, self.compute_next_fire_time(config, now))

    def schedule_all(
        self, configs: Iterable[PingConfig], now: Optional[datetime] = None
    ) -> List[ScheduleAction]:
        """One independent decision per config, in input order."""
        if now is None:
            now = self._clock.now()
        return [self.decide_schedule_action(c, now) for c in configs]

"""Clock and random-source adapters: implement ClockPort / RandomSourcePort."""

import os
import random
from datetime import datetime, tzinfo
from typing import Iterable, Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_LOCALTIME = "/etc/localtime"


def host_zone() -> Optional[ZoneInfo]:
    """The host's IANA zone from $TZ or /etc/localtime, or None if unknown."""
    key = os.environ.get("TZ", "").lstrip(":")
    if key:
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, KeyError, ValueError):
            # POSIX TZ rule string: only the C library can interpret it
            return None
    try:
        target = os.path.realpath(_LOCALTIME)
        marker = "zoneinfo" + os.sep
        if marker in target:
            return ZoneInfo(target.split(marker, 1)[1])
        with open(_LOCALTIME, "rb") as f:
            return ZoneInfo.from_file(f)
    except (OSError, ZoneInfoNotFoundError, KeyError, ValueError):
        return None


class SystemClock:
    """Wall clock in an IANA zone: tz if given, else the host's zone.

    When the host zone cannot be resolved, local times fall back to the C
    library's offsets, looked up per wall-clock time.
    """

    def __init__(self, tz: Optional[str] = None):
        self._tz: Optional[tzinfo] = None
        if tz:
            try:
                self._tz = ZoneInfo(tz)
            except (ZoneInfoNotFoundError, KeyError, ValueError):
                raise ValueError(f"invalid timezone: {tz!r}")
        else:
            self._tz = host_zone()

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)

    def to_local(self, ts: datetime) -> datetime:
        # Naive timestamps are local wall-clock times.
        if self._tz is None:
            return ts.astimezone()
        if ts.tzinfo is None:
            return ts.replace(tzinfo=self._tz)
        return ts.astimezone(self._tz)


class FixedClock(SystemClock):
    """Clock pinned to one aware instant; advance() moves it forward.

    Without tz, local time is the zone of the given instant.
    """

    def __init__(self, now: datetime, tz: Optional[str] = None):
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("FixedClock needs a timezone-aware datetime")
        if tz:
            super().__init__(tz)
        else:
            self._tz = now.tzinfo
        self._now = self.to_local(now)

    def now(self) -> datetime:
        return self._now

    def advance(self, delta) -> None:
        self._now = self._now + delta


class SystemRandomSource:
    """Uniform [0, 1) samples from random.Random."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()


class SequenceRandomSource:
    """Replays fixed samples in order, then repeats the last one."""

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        if not self._values:
            raise ValueError("SequenceRandomSource needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"sample out of [0, 1): {v!r}")
        self._index = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        self.calls += 1
        return value

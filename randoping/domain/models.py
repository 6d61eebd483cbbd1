"""Domain data models: pure Python dataclasses."""

import random
import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Iterable, Optional, Union

DEFAULT_NAME = "Ping!"
DEFAULT_MESSAGE = "notice the vividness of reality"
DEFAULT_AVG_MINUTES = 45
DEFAULT_QUIET_START_HOUR = 22
DEFAULT_QUIET_END_HOUR = 8
# One year. Draws reach ~37x the mean, which must stay inside datetime range.
MAX_AVG_MINUTES = 60 * 24 * 365


class InvalidConfiguration(ValueError):
    """Raised when a ping configuration violates its invariants."""


class PingColors:
    """ARGB palette offered for new pings."""

    PURPLE = 0xFF6750A4
    BLUE = 0xFF1976D2
    GREEN = 0xFF388E3C
    ORANGE = 0xFFF57C00
    PINK = 0xFFD81B60
    CYAN = 0xFF00897B
    DEEP_ORANGE = 0xFFE64A19
    DEEP_PURPLE = 0xFF512DA8

    DEFAULT = PURPLE
    ALL = (PURPLE, BLUE, GREEN, ORANGE, PINK, CYAN, DEEP_ORANGE, DEEP_PURPLE)

    @classmethod
    def next_unused_color(
        cls,
        existing: Iterable["PingConfig"],
        rng: Optional[random.Random] = None,
    ) -> int:
        """First palette color no existing ping uses, else a random one."""
        used = {c.color_value for c in existing}
        for color in cls.ALL:
            if color not in used:
                return color
        return (rng or random).choice(cls.ALL)


ICON_KEYS = (
    "bell", "star", "heart", "lightbulb", "eye", "meditate", "brain", "leaf",
    "music", "fitness", "coffee", "bolt", "water", "sun", "moon", "paw",
    "briefcase", "school", "runner", "timer", "palette", "restaurant",
    "house", "compass", "cloud", "spa", "sparkle", "anchor", "diamond",
    "rocket",
)
DEFAULT_ICON = ICON_KEYS[0]


def resolve_icon(key: str) -> str:
    return key if key in ICON_KEYS else DEFAULT_ICON


def new_ping_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PingConfig:
    """One reminder configuration. Read-only to the scheduler."""

    id: str = field(default_factory=new_ping_id)
    name: str = DEFAULT_NAME
    message: str = DEFAULT_MESSAGE
    avg_minutes: float = DEFAULT_AVG_MINUTES  # mean of the exponential gap
    quiet_start_hour: int = DEFAULT_QUIET_START_HOUR  # 0-23
    quiet_end_hour: int = DEFAULT_QUIET_END_HOUR  # 0-23, may be < start (wraps midnight)
    enabled: bool = True
    color_value: int = PingColors.DEFAULT
    icon_name: str = DEFAULT_ICON

    @property
    def quiet_window_wraps(self) -> bool:
        return self.quiet_start_hour > self.quiet_end_hour

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PingConfig":
        """Build from a dict, ignoring unknown keys and defaulting missing ones."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _check_hour(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer hour, got {value!r}")
    if not 0 <= value <= 23:
        raise InvalidConfiguration(f"{name} must be in 0-23, got {value}")


def validate_config(config: PingConfig) -> PingConfig:
    """Raise InvalidConfiguration unless the config satisfies its invariants."""
    if not config.id:
        raise InvalidConfiguration("id must be a non-empty string")
    avg = config.avg_minutes
    if isinstance(avg, bool) or not isinstance(avg, (int, float)) or not avg > 0:
        raise InvalidConfiguration(f"avg_minutes must be > 0, got {avg!r}")
    if avg > MAX_AVG_MINUTES:
        raise InvalidConfiguration(
            f"avg_minutes must be <= {MAX_AVG_MINUTES}, got {avg!r}"
        )
    _check_hour("quiet_start_hour", config.quiet_start_hour)
    _check_hour("quiet_end_hour", config.quiet_end_hour)
    return config


@dataclass(frozen=True)
class Schedule:
    """Register a one-shot wake for config_id at fire_at."""

    config_id: str
    fire_at: datetime


@dataclass(frozen=True)
class Cancel:
    """Cancel any pending wake for config_id."""

    config_id: str


ScheduleAction = Union[Schedule, Cancel]

"""Domain layer: pure Python, no framework dependencies."""

from randoping.domain.models import (
    DEFAULT_ICON,
    ICON_KEYS,
    Cancel,
    MAX_AVG_MINUTES,
    InvalidConfiguration,
    PingColors,
    PingConfig,
    Schedule,
    ScheduleAction,
    new_ping_id,
    resolve_icon,
    validate_config,
)
from randoping.domain.scheduler import PingScheduler, exponential_sample, in_quiet_hours

__all__ = [
    "DEFAULT_ICON",
    "ICON_KEYS",
    "Cancel",
    "MAX_AVG_MINUTES",
    "InvalidConfiguration",
    "PingColors",
    "PingConfig",
    "PingScheduler",
    "Schedule",
    "ScheduleAction",
    "exponential_sample",
    "in_quiet_hours",
    "new_ping_id",
    "resolve_icon",
    "validate_config",
]

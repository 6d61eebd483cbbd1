"""randoping: random reminder pings with per-ping quiet hours."""

from randoping.config import __version__
from randoping.domain import (
    Cancel,
    InvalidConfiguration,
    PingColors,
    PingConfig,
    PingScheduler,
    Schedule,
    validate_config,
)
from randoping.service import PingService, UnknownPing

__all__ = [
    "__version__",
    "Cancel",
    "InvalidConfiguration",
    "PingColors",
    "PingConfig",
    "PingScheduler",
    "PingService",
    "Schedule",
    "UnknownPing",
    "validate_config",
]

"""Configuration and shared settings."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, using {default!r}")
        return default


def _resolve_tz(raw: str) -> str:
    raw = raw.strip()
    if not raw:
        return ""
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, KeyError, ValueError):
        _stderr_print(f"Unknown RANDOPING_TZ={raw!r}, falling back to host local time")
        return ""
    return raw


CONFIG = {
    "host": os.getenv("RANDOPING_HOST", "0.0.0.0"),
    "port": _env_int("RANDOPING_PORT", 3000),
    # Empty means the host's local zone
    "tz": _resolve_tz(os.getenv("RANDOPING_TZ", "")),
    "seed": _env_int("RANDOPING_SEED", None),
    # Discord notifier is used only when both are set
    "discord_bot_token": os.getenv("DISCORD_BOT_TOKEN", ""),
    "discord_ping_channel_id": _env_int("DISCORD_PING_CHANNEL_ID", 0),
}


# ── Typed config ───────────────────────────────────────────


@dataclass
class NotifierConfig:
    discord_bot_token: str = ""
    discord_ping_channel_id: int = 0

    @property
    def discord_enabled(self) -> bool:
        return bool(self.discord_bot_token) and self.discord_ping_channel_id > 0


@dataclass
class AppConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    tz: str = ""
    seed: Optional[int] = None
    notifier: NotifierConfig = field(default_factory=NotifierConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            host=CONFIG["host"],
            port=CONFIG["port"],
            tz=CONFIG["tz"],
            seed=CONFIG["seed"],
            notifier=NotifierConfig(
                discord_bot_token=CONFIG["discord_bot_token"],
                discord_ping_channel_id=CONFIG["discord_ping_channel_id"],
            ),
        )

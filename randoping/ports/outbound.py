"""Outbound ports: interfaces for the collaborators around the scheduler."""

from datetime import datetime
from typing import Dict, Protocol, runtime_checkable

from randoping.domain.models import PingConfig


@runtime_checkable
class ClockPort(Protocol):
    """Current time and local wall-clock conversion."""

    def now(self) -> datetime: ...
    def to_local(self, ts: datetime) -> datetime: ...


@runtime_checkable
class RandomSourcePort(Protocol):
    """Uniform samples in [0, 1)."""

    def random(self) -> float: ...


@runtime_checkable
class AlarmRegistrarPort(Protocol):
    """One-shot wakes keyed by config id."""

    def register(self, config_id: str, fire_at: datetime) -> None: ...
    def cancel(self, config_id: str) -> None: ...
    def pending(self) -> Dict[str, datetime]: ...


@runtime_checkable
class NotificationPort(Protocol):
    """Shows a ping to the user."""

    async def send(self, config: PingConfig) -> None: ...

"""Adapters: clock, alarm registrar, notifier and web implementations of the ports."""

from randoping.adapters.alarms import AsyncioAlarmRegistrar, InMemoryAlarmRegistrar
from randoping.adapters.clock import (
    FixedClock,
    SequenceRandomSource,
    SystemClock,
    SystemRandomSource,
)
from randoping.adapters.notify import DiscordNotificationAdapter, LogNotifier

__all__ = [
    "AsyncioAlarmRegistrar",
    "InMemoryAlarmRegistrar",
    "FixedClock",
    "SequenceRandomSource",
    "SystemClock",
    "SystemRandomSource",
    "DiscordNotificationAdapter",
    "LogNotifier",
]

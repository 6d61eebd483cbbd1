"""Port interfaces (Hexagonal Architecture)."""

from randoping.ports.outbound import (
    AlarmRegistrarPort,
    ClockPort,
    NotificationPort,
    RandomSourcePort,
)

__all__ = [
    "AlarmRegistrarPort",
    "ClockPort",
    "NotificationPort",
    "RandomSourcePort",
]

"""Alarm registrar adapters: implement AlarmRegistrarPort."""

import asyncio
import sys
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from randoping.ports.outbound import ClockPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class InMemoryAlarmRegistrar:
    """Records pending wakes without ever firing them."""

    def __init__(self):
        self._pending: Dict[str, datetime] = {}

    def register(self, config_id: str, fire_at: datetime) -> None:
        self._pending[config_id] = fire_at

    def cancel(self, config_id: str) -> None:
        self._pending.pop(config_id, None)

    def pending(self) -> Dict[str, datetime]:
        return dict(self._pending)


class AsyncioAlarmRegistrar:
    """In-process one-shot wakes backed by asyncio tasks.

    One task per config id sleeps until fire_at and then awaits
    on_fire(config_id). Registering an id again replaces its task.
    register() must be called with a running event loop.
    """

    def __init__(
        self,
        on_fire: Optional[Callable[[str], Awaitable[object]]] = None,
        clock: Optional[ClockPort] = None,
    ):
        if clock is None:
            from randoping.adapters.clock import SystemClock

            clock = SystemClock()
        self._on_fire = on_fire
        self._clock = clock
        self._pending: Dict[str, datetime] = {}
        self._tasks: Dict[str, asyncio.Task] = {}
        self._fire_tasks: set = set()  # track in-flight fire tasks for cleanup

    def set_handler(self, on_fire: Callable[[str], Awaitable[object]]) -> None:
        self._on_fire = on_fire

    def register(self, config_id: str, fire_at: datetime) -> None:
        self._drop(config_id)
        task = asyncio.get_running_loop().create_task(self._wait_and_fire(config_id, fire_at))
        self._tasks[config_id] = task
        self._pending[config_id] = fire_at
        self._fire_tasks.add(task)
        task.add_done_callback(self._fire_tasks.discard)
        _log(f"[AlarmRegistrar] {config_id}: scheduled for {fire_at.isoformat()}")

    def cancel(self, config_id: str) -> None:
        if self._drop(config_id):
            _log(f"[AlarmRegistrar] {config_id}: cancelled")

    def pending(self) -> Dict[str, datetime]:
        return dict(self._pending)

    async def close(self) -> None:
        """Cancel every pending and in-flight task."""
        self._tasks.clear()
        self._pending.clear()
        tasks = list(self._fire_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._fire_tasks.clear()

    def _drop(self, config_id: str) -> bool:
        self._pending.pop(config_id, None)
        task = self._tasks.pop(config_id, None)
        if task is None:
            return False
        task.cancel()
        return True

    async def _wait_and_fire(self, config_id: str, fire_at: datetime) -> None:
        delay = (fire_at - self._clock.now()).total_seconds()
        if delay > 0:
            await asyncio.sleep(delay)
        # Unregister before firing so the handler can register the next wake.
        if self._tasks.get(config_id) is asyncio.current_task():
            del self._tasks[config_id]
            self._pending.pop(config_id, None)
        if self._on_fire is None:
            _log(f"[AlarmRegistrar] {config_id}: fired with no handler")
            return
        try:
            await self._on_fire(config_id)
        except Exception as e:
            _log(f"[AlarmRegistrar] {config_id}: fire handler failed: {e}")

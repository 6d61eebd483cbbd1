"""FastAPI application wiring and startup."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from randoping.adapters.alarms import AsyncioAlarmRegistrar
from randoping.adapters.clock import SystemClock, SystemRandomSource
from randoping.adapters.notify import DiscordNotificationAdapter, LogNotifier
from randoping.adapters.web.routes import ping_router, set_service
from randoping.config import AppConfig
from randoping.domain.scheduler import PingScheduler
from randoping.service import PingService


def _log(msg: str):
    print(msg, file=sys.stderr)


def _build_discord_client():
    import discord

    return discord.Client(intents=discord.Intents.default())


def build_service(config: AppConfig, discord_client=None):
    """Wire scheduler, registrar and notifier into a PingService."""
    clock = SystemClock(config.tz or None)
    scheduler = PingScheduler(clock=clock, rng=SystemRandomSource(config.seed))
    registrar = AsyncioAlarmRegistrar(clock=clock)
    if discord_client is not None:
        notifier = DiscordNotificationAdapter(
            discord_client, config.notifier.discord_ping_channel_id
        )
    else:
        notifier = LogNotifier()
    service = PingService(scheduler, registrar, notifier)
    registrar.set_handler(service.on_alarm_fired)
    return service, registrar


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or AppConfig.from_env()
    discord_client = _build_discord_client() if config.notifier.discord_enabled else None
    service, registrar = build_service(config, discord_client)
    set_service(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log("randoping server starting")
        _log(f"Timezone: {config.tz or 'host local'}")
        discord_task = None
        if discord_client is not None:
            _log("Starting Discord notifier...")

            async def _start_discord():
                try:
                    await discord_client.start(config.notifier.discord_bot_token)
                except Exception as e:
                    _log(f"Discord notifier failed to start: {e}")

            discord_task = asyncio.create_task(_start_discord())
        else:
            _log("Discord notifier not configured, pings go to stderr")
        _log("Ready!")
        try:
            yield
        finally:
            await registrar.close()
            if discord_task is not None:
                await discord_client.close()
                discord_task.cancel()

    app = FastAPI(title="randoping", lifespan=lifespan)
    app.include_router(ping_router)
    app.state.service = service
    return app

"""Notification adapters: implement NotificationPort."""

import sys

from randoping.domain.models import PingConfig

_DISCORD_MAX_LEN = 2000


def _log(msg: str):
    print(msg, file=sys.stderr)


def format_ping(config: PingConfig) -> str:
    return f"**{config.name}** {config.message}"


class LogNotifier:
    """Writes pings to stderr."""

    async def send(self, config: PingConfig) -> None:
        _log(f"[ping] {config.name}: {config.message}")


class DiscordNotificationAdapter:
    """NotificationPort implementation posting pings to one Discord channel."""

    def __init__(self, client, channel_id: int):
        self._client = client  # discord.Client
        self._channel_id = channel_id

    async def send(self, config: PingConfig) -> None:
        channel = self._client.get_channel(self._channel_id)
        if channel is None:
            _log(f"[DiscordNotifier] channel {self._channel_id} not found, dropping ping {config.id}")
            return
        text = format_ping(config)
        # Split long messages
        while text:
            await channel.send(text[:_DISCORD_MAX_LEN])
            text = text[_DISCORD_MAX_LEN:]

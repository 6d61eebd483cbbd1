"""Tests for notification adapters."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from randoping.adapters.notify import DiscordNotificationAdapter, LogNotifier, format_ping
from randoping.domain.models import PingConfig
from randoping.ports.outbound import NotificationPort


class TestLogNotifier:
    @pytest.mark.asyncio
    async def test_writes_to_stderr(self, capsys):
        await LogNotifier().send(PingConfig(name="Water", message="drink some"))
        assert "[ping] Water: drink some" in capsys.readouterr().err

    def test_conforms_to_port(self):
        assert isinstance(LogNotifier(), NotificationPort)


class TestDiscordNotificationAdapter:
    @pytest.mark.asyncio
    async def test_sends_to_channel(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        client = MagicMock()
        client.get_channel.return_value = channel

        adapter = DiscordNotificationAdapter(client, 123)
        await adapter.send(PingConfig(name="Ping!", message="look up"))

        client.get_channel.assert_called_once_with(123)
        channel.send.assert_awaited_once_with("**Ping!** look up")

    @pytest.mark.asyncio
    async def test_splits_long_messages(self):
        channel = MagicMock()
        channel.send = AsyncMock()
        client = MagicMock()
        client.get_channel.return_value = channel

        config = PingConfig(name="Long", message="x" * 4500)
        await DiscordNotificationAdapter(client, 1).send(config)

        sent = [c.args[0] for c in channel.send.await_args_list]
        assert len(sent) == 3
        assert all(len(s) <= 2000 for s in sent)
        assert "".join(sent) == format_ping(config)

    @pytest.mark.asyncio
    async def test_missing_channel_is_dropped(self, capsys):
        client = MagicMock()
        client.get_channel.return_value = None
        await DiscordNotificationAdapter(client, 99).send(PingConfig(id="p1"))
        assert "channel 99 not found" in capsys.readouterr().err

    def test_conforms_to_port(self):
        assert isinstance(DiscordNotificationAdapter(MagicMock(), 1), NotificationPort)

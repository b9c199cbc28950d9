"""Tests for the notification system."""
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from plantmon.lib.config import Settings
from plantmon.lib.notifications import (
    CallbackNotifier,
    LogNotifier,
    NoOpNotifier,
    Notification,
    get_notifier,
)


class TestNotification:
    def test_default_title(self):
        notification = Notification("Soil is dry")

        assert notification.title == "🌱 Plant Alert"
        assert str(notification) == "🌱 Plant Alert: Soil is dry"


class TestNotifiers:
    """Tests for the notifier backends."""

    @pytest.mark.asyncio
    async def test_log_notifier_warns(self, caplog):
        await LogNotifier().send(Notification("Soil is dry"))

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "Soil is dry" in record.getMessage()

    @pytest.mark.asyncio
    async def test_noop_notifier_skips(self, caplog):
        await NoOpNotifier().send(Notification("Soil is dry"))

        assert "Notifications disabled" in caplog.text

    @pytest.mark.asyncio
    async def test_callback_notifier_sync(self):
        callback = MagicMock(return_value=None)
        notification = Notification("Too hot")

        await CallbackNotifier(callback).send(notification)

        callback.assert_called_once_with(notification)

    @pytest.mark.asyncio
    async def test_callback_notifier_async(self):
        callback = AsyncMock()
        notification = Notification("Too hot")

        await CallbackNotifier(callback).send(notification)

        callback.assert_awaited_once_with(notification)

    @pytest.mark.asyncio
    async def test_callback_errors_propagate(self):
        notifier = CallbackNotifier(MagicMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await notifier.send(Notification("x"))


class TestGetNotifier:
    def test_enabled_returns_log_notifier(self):
        notifier = get_notifier(Settings(_env_file=None))
        assert isinstance(notifier, LogNotifier)

    def test_disabled_returns_noop(self):
        notifier = get_notifier(Settings(_env_file=None, enable_notifications=False))
        assert isinstance(notifier, NoOpNotifier)

    def test_uses_global_settings(self):
        assert isinstance(get_notifier(), LogNotifier)

"""Tests for the home and history service entry points."""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from plantmon.history import service as history_service
from plantmon.home import service as home_service
from plantmon.lib.config import PollingSettings, Settings
from plantmon.lib.config.testing import set_settings
from plantmon.lib.sensors import Sensor
from plantmon.lib.service import run_service


@pytest.fixture
def mock_settings():
    """Point the services at the mock monitor source."""
    settings = Settings(_env_file=None, mock_source=True)
    set_settings(settings)
    return settings


class TestHomeService:
    """Tests for the home dashboard service."""

    def test_build_tasks(self):
        view = MagicMock()
        polling = PollingSettings(reading_interval_sec=5, alert_interval_sec=30)

        tasks = home_service.build_tasks(view, polling)

        assert [(t.name, t.interval_sec) for t in tasks] == [
            ("readings", 5),
            ("alerts", 30),
        ]

    @pytest.mark.asyncio
    async def test_readings_task_prints_dashboard(self, capsys):
        view = MagicMock()
        view.refresh_latest = AsyncMock()
        view.render.return_value = "dashboard"
        tasks = home_service.build_tasks(view, PollingSettings())

        await tasks[0].action()

        view.refresh_latest.assert_awaited_once()
        assert capsys.readouterr().out == "dashboard\n"

    @pytest.mark.asyncio
    async def test_run_until_stopped(self, mock_settings, capsys):
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, stop.set)

        await home_service.run(stop)

        out = capsys.readouterr().out
        assert "Temperature" in out
        assert "Last reading:" in out


class TestHistoryService:
    """Tests for the history service."""

    def test_parse_args_defaults(self):
        args = history_service.parse_args([])

        assert args.sensor == "temperature"
        assert args.range_label is None
        assert args.watch is False

    def test_parse_args_range_case_insensitive(self):
        args = history_service.parse_args(["moisture", "--range", "week", "--watch"])

        assert args.sensor == "moisture"
        assert args.range_label == "Week"
        assert args.watch is True

    def test_parse_args_rejects_unknown_range(self):
        with pytest.raises(SystemExit):
            history_service.parse_args(["--range", "year"])

    def test_build_view_uses_settings(self, client):
        set_settings(Settings(_env_file=None, default_range="Month", history_hours=168))

        view = history_service.build_view(client, Sensor.LIGHT, None)

        assert view.selected_range.label == "Month"
        assert view.sensor is Sensor.LIGHT

    def test_build_view_explicit_range(self, client):
        view = history_service.build_view(client, Sensor.LIGHT, "1h")
        assert view.selected_range.label == "1h"

    @pytest.mark.asyncio
    async def test_run_once(self, mock_settings, capsys):
        await history_service.run(
            asyncio.Event(), sensor=Sensor.HUMIDITY, range_label="24h"
        )

        out = capsys.readouterr().out
        assert out.startswith("Humidity History")
        assert "Summary" in out

    @pytest.mark.asyncio
    async def test_run_watch_until_stopped(self, mock_settings, capsys):
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, stop.set)

        await history_service.run(stop, sensor=Sensor.LIGHT, watch=True)

        assert "Light History" in capsys.readouterr().out

    def test_main_runs_service(self):
        with patch.object(history_service, "run_service") as run_service_mock:
            history_service.main(["pressure", "--range", "1h"])

        service = run_service_mock.call_args.args[0]
        assert service.keywords == {
            "sensor": Sensor.TEMPERATURE,
            "range_label": "1h",
            "watch": False,
        }


class TestRunService:
    def test_passes_stop_event(self):
        received = []

        async def main(stop):
            received.append(stop)

        with patch("plantmon.lib.service.configure") as configure:
            run_service(main, name="test")

        configure.assert_called_once_with("INFO")
        assert isinstance(received[0], asyncio.Event)
        assert not received[0].is_set()

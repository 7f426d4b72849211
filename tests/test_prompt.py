import asyncio
import io
import sys
import threading
import time

import pytest

import display_weather_pizoo
from display_weather_pizoo import build_controller, run_prompt
from pixoo_weather.models import Loading, Success
from pixoo_weather.render.tree import TextField, iter_nodes
from pixoo_weather.settings import AppSettings
from tests.render_recorder import RecordingRenderer
from tests.weather_payloads import make_payload


def _settings(display_mode="console"):
    return AppSettings(
        weather_api_key="secret",
        weather_api_base_url="https://weather.test/v1",
        display_mode=display_mode,
        pixoo_ip="127.0.0.1",
        pixoo_port=80,
        pixoo_reconnect_seconds=1,
        font_name="splitflap",
        font_path="./fonts/splitflap.bdf",
        weather_view_seconds=5,
        icon_dir="weather_icons",
        log_level="INFO",
    )


def _scripted_lines(controller, lines):
    pending = list(lines)

    async def read_line():
        await controller.scope.join()
        return pending.pop(0) if pending else None

    return read_line


def test_prompt_lines_drive_keyboard_search_and_button(requests_mock):
    requests_mock.get("https://weather.test/v1/current.json", json=make_payload())
    renderer = RecordingRenderer()
    controller = build_controller(_settings(), renderer=renderer)

    asyncio.run(run_prompt(controller, read_line=_scripted_lines(controller, ["London\n", "\n", "/quit\n", "Paris\n"])))

    assert requests_mock.call_count == 2
    assert isinstance(controller.store.observe(), Success)
    assert controller.scope.closed
    fields = [node.value for node in iter_nodes(renderer.trees[-1]) if isinstance(node, TextField)]
    assert fields == ["London"]


def test_initial_city_is_searched_before_reading_input(requests_mock):
    requests_mock.get("https://weather.test/v1/current.json", json=make_payload())
    renderer = RecordingRenderer()
    controller = build_controller(_settings(), renderer=renderer)

    asyncio.run(run_prompt(controller, read_line=_scripted_lines(controller, []), initial_city="London"))

    assert requests_mock.call_count == 1
    assert "key=secret" in requests_mock.last_request.url
    assert isinstance(controller.store.observe(), Success)


def test_main_reports_invalid_configuration(monkeypatch, caplog):
    import pixoo_weather.settings as settings_module

    monkeypatch.setattr(settings_module.app_config, "WEATHER_API_KEY", "", raising=False)

    assert display_weather_pizoo.main(["--console"]) == 2
    assert "WEATHER_API_KEY" in caplog.text


def _immediate_lines(lines):
    pending = list(lines)

    async def read_line():
        return pending.pop(0) if pending else None

    return read_line


def test_end_of_input_waits_for_running_search(requests_mock):
    requests_mock.get("https://weather.test/v1/current.json", json=make_payload())
    controller = build_controller(_settings(), renderer=RecordingRenderer())

    asyncio.run(run_prompt(controller, read_line=_immediate_lines(["London\n"])))

    assert isinstance(controller.store.observe(), Success)
    assert controller.scope.closed


def test_initial_city_with_no_input_still_shows_weather(requests_mock):
    requests_mock.get("https://weather.test/v1/current.json", json=make_payload())
    controller = build_controller(_settings(), renderer=RecordingRenderer())

    asyncio.run(run_prompt(controller, read_line=_immediate_lines([]), initial_city="London"))

    assert isinstance(controller.store.observe(), Success)


def test_quit_cancels_running_search(requests_mock):
    requests_mock.get("https://weather.test/v1/current.json", json=make_payload())
    controller = build_controller(_settings(), renderer=RecordingRenderer())

    asyncio.run(run_prompt(controller, read_line=_immediate_lines(["London\n", "/quit\n"])))

    assert controller.store.observe() == Loading()
    assert controller.scope.closed


def test_stdin_lines_are_read_until_end_of_input(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("London\n"))

    async def scenario():
        return [await display_weather_pizoo._read_stdin_line(), await display_weather_pizoo._read_stdin_line()]

    assert asyncio.run(scenario()) == ["London\n", None]


def test_cancelled_stdin_read_does_not_hold_up_shutdown(monkeypatch):
    release = threading.Event()

    class BlockedStdin:
        def readline(self):
            release.wait(timeout=5)
            return ""

    monkeypatch.setattr(sys, "stdin", BlockedStdin())

    async def scenario():
        task = asyncio.get_running_loop().create_task(display_weather_pizoo._read_stdin_line())
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    started = time.monotonic()
    try:
        asyncio.run(scenario())
        assert time.monotonic() - started < 2
    finally:
        release.set()

import io

import pytest

from pixoo_weather.models import Error, Idle, Loading, Success
from pixoo_weather.render.console_renderer import ConsoleRenderer, render_lines
from pixoo_weather.render.tree import Card, IconButton, Image, ProgressIndicator, TextField, collect_text, iter_nodes
from pixoo_weather.render.weather_view import (
    IDLE_PROMPT,
    build_weather_page,
    icon_url,
    local_date,
    local_time,
)
from tests.weather_payloads import make_snapshot


def _nodes(tree, node_type):
    return [node for node in iter_nodes(tree) if isinstance(node, node_type)]


def test_icon_url_upgrades_resolution_and_adds_scheme():
    assert icon_url("//cdn.example/64x64/icon.png") == "https://cdn.example/128x128/icon.png"


def test_localtime_is_split_into_time_and_reversed_date():
    assert local_time("2024-05-30 14:00") == "14:00"
    assert local_date("2024-05-30 14:00") == "30-05-2024"


def test_localtime_without_time_part_yields_empty_time():
    assert local_time("2024-05-30") == ""
    assert local_date("2024-05-30") == "30-05-2024"


def test_search_row_is_present_in_every_state():
    for state in (Idle(), Loading(), Success(make_snapshot()), Error("Failed to fetch weather data")):
        tree = build_weather_page("Lon", state)
        fields = _nodes(tree, TextField)
        buttons = _nodes(tree, IconButton)
        assert [f.value for f in fields] == ["Lon"]
        assert fields[0].label == "City"
        assert fields[0].ime_action == "search"
        assert [b.content_description for b in buttons] == ["Search"]


def test_idle_state_shows_prompt():
    tree = build_weather_page("", Idle())
    assert collect_text(tree) == [IDLE_PROMPT]


def test_loading_state_shows_progress_indicator_only():
    tree = build_weather_page("London", Loading())
    assert len(_nodes(tree, ProgressIndicator)) == 1
    assert collect_text(tree) == []


def test_error_state_shows_message_as_plain_text():
    tree = build_weather_page("London", Error("Failed to fetch weather data"))
    assert collect_text(tree) == ["Failed to fetch weather data"]
    assert _nodes(tree, ProgressIndicator) == []


def test_success_state_renders_london_details():
    tree = build_weather_page("London", Success(make_snapshot(feelslike_c=18.2, humidity=60)))
    texts = collect_text(tree)

    assert texts[:4] == ["London", "United Kingdom", "18.2°C", "Partly cloudy"]
    assert "60%" in texts
    assert "11.2 km/h" in texts
    assert "1016.0 hPa" in texts
    assert "4.0" in texts
    assert "14:00" in texts
    assert "30-05-2024" in texts
    assert [node.url for node in _nodes(tree, Image)] == ["https://cdn.weatherapi.com/weather/128x128/day/116.png"]


def test_success_details_card_pairs_values_with_labels():
    tree = build_weather_page("London", Success(make_snapshot()))
    (card,) = _nodes(tree, Card)

    assert collect_text(card) == [
        "60%", "Humidity", "11.2 km/h", "Wind",
        "1016.0 hPa", "Pressure", "4.0", "UV Index",
        "14:00", "Local Time", "30-05-2024", "Date",
    ]


def test_unknown_state_is_rejected():
    with pytest.raises(TypeError):
        build_weather_page("London", object())


def test_console_renderer_prints_field_and_details():
    stream = io.StringIO()
    ConsoleRenderer(stream).render(build_weather_page("London", Success(make_snapshot())))
    output = stream.getvalue()

    assert "[City: London]" in output
    assert "18.2°C" in output
    assert "60%  Humidity  11.2 km/h  Wind" in output


def test_console_renderer_loading_line():
    assert "Loading..." in render_lines(build_weather_page("London", Loading()))[-1]


def test_console_renderer_rejects_unknown_nodes():
    with pytest.raises(TypeError):
        render_lines(object())

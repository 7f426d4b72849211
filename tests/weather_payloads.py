"""Test helper: WeatherAPI.com `current.json` bodies."""

from pixoo_weather.models import WeatherSnapshot


def make_payload(name="London", country="United Kingdom", localtime="2024-05-30 14:00", feelslike_c=18.2, humidity=60):
    return {
        "location": {"name": name, "country": country, "localtime": localtime, "region": "City of London"},
        "current": {
            "temp_c": 19.0,
            "feelslike_c": feelslike_c,
            "humidity": humidity,
            "wind_kph": 11.2,
            "pressure_mb": 1016.0,
            "uv": 4.0,
            "condition": {"text": "Partly cloudy", "icon": "//cdn.weatherapi.com/weather/64x64/day/116.png", "code": 1003},
        },
    }


def make_snapshot(**kwargs) -> WeatherSnapshot:
    return WeatherSnapshot.from_dict(make_payload(**kwargs))

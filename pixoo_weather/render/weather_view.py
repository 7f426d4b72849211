from pixoo_weather.models import Error, Idle, Loading, Success, WeatherSnapshot

from .tree import Card, Column, IconButton, Image, ProgressIndicator, Row, Text, TextField

IDLE_PROMPT = "Enter a city to fetch weather data"
ICON_LOW_RES_TOKEN = "64x64"
ICON_HIGH_RES_TOKEN = "128x128"


def icon_url(icon_path: str) -> str:
    """Upgrade a protocol-relative WeatherAPI icon path to a 128px https URL."""
    return f"https:{icon_path}".replace(ICON_LOW_RES_TOKEN, ICON_HIGH_RES_TOKEN)


def local_time(localtime: str) -> str:
    return localtime.partition(" ")[2]


def local_date(localtime: str) -> str:
    """Convert the date part of "YYYY-MM-DD HH:MM" to "DD-MM-YYYY"."""
    return "-".join(reversed(localtime.partition(" ")[0].split("-")))


def weather_key_val(key: str, value: str) -> Column:
    return Column((Text(value, style="value"), Text(key, style="label")))


def build_search_row(input_text: str) -> Row:
    return Row(
        (
            TextField(value=input_text, label="City", leading_icon="location", ime_action="search"),
            IconButton(icon="search", content_description="Search"),
        )
    )


def build_weather_details(data: WeatherSnapshot) -> Column:
    location = data.location
    current = data.current
    return Column(
        (
            Row((Text(location.name, style="title"), Text(location.country, style="subtitle"))),
            Text(f"{current.feelslike_c}°C", style="headline"),
            Image(url=icon_url(current.condition.icon_url), content_description="Weather icon"),
            Text(current.condition.text, style="subtitle"),
            Card(
                (
                    Row((weather_key_val("Humidity", f"{current.humidity}%"), weather_key_val("Wind", f"{current.wind_kph} km/h"))),
                    Row((weather_key_val("Pressure", f"{current.pressure_mb} hPa"), weather_key_val("UV Index", f"{current.uv}"))),
                    Row(
                        (
                            weather_key_val("Local Time", local_time(location.localtime)),
                            weather_key_val("Date", local_date(location.localtime)),
                        )
                    ),
                )
            ),
        )
    )


def build_results_area(state):
    if isinstance(state, Success):
        return build_weather_details(state.data)
    if isinstance(state, Error):
        return Text(state.message)
    if isinstance(state, Loading):
        return ProgressIndicator()
    if isinstance(state, Idle):
        return Text(IDLE_PROMPT)
    raise TypeError(f"Unknown fetch state: {state!r}")


def build_weather_page(input_text: str, state) -> Column:
    """Return the full screen tree for the current input text and fetch state."""
    return Column((build_search_row(input_text), build_results_area(state)))

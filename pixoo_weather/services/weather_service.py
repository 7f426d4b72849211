from weather_data import WeatherData, WeatherTransportError
from pixoo_weather.models import WeatherSnapshot


class WeatherService:
    def __init__(self, base_url: str, client=None):
        self._client = client or WeatherData(base_url=base_url)

    def fetch_current_weather(self, api_key: str, city: str) -> WeatherSnapshot:
        payload = self._client.get_current(api_key, city)
        try:
            return WeatherSnapshot.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise WeatherTransportError("decode", f"Unexpected weather payload shape: {exc!r}") from exc

"""Weather data provider for the city search screen (WeatherAPI.com current conditions)."""

import logging

import requests


LOGGER = logging.getLogger("pixoo_weather.weather")
WEATHER_HTTP_TIMEOUT_SECONDS = 10


class WeatherTransportError(RuntimeError):
    """Raised when no usable weather payload could be obtained.

    `cause` is one of "network", "status" or "decode" and is kept for
    diagnostics only; callers show a single message to the user.
    """

    def __init__(self, cause: str, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.cause = cause
        self.detail = detail
        self.status_code = status_code


class WeatherData:
    """Fetch raw current-weather payloads from the `current.json` endpoint."""

    CURRENT_PATH = "current.json"

    def __init__(self, base_url: str, session=None, timeout_seconds: float = WEATHER_HTTP_TIMEOUT_SECONDS):
        self.base_url = str(base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds

    @property
    def current_url(self) -> str:
        return f"{self.base_url}/{self.CURRENT_PATH}"

    def get_current(self, api_key: str, city: str) -> dict:
        """Return the decoded JSON object for `city` or raise WeatherTransportError."""
        params = {"key": api_key, "q": city}
        LOGGER.info("Requesting current weather for %r.", city)
        try:
            response = self.session.get(self.current_url, params=params, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise WeatherTransportError("network", f"Weather request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise WeatherTransportError(
                "status",
                f"Weather API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not response.content:
            raise WeatherTransportError("decode", "Weather API returned an empty body", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise WeatherTransportError(
                "decode",
                f"Weather API returned invalid JSON: {exc}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise WeatherTransportError(
                "decode",
                f"Weather API returned {type(payload).__name__}, expected an object",
                status_code=response.status_code,
            )
        LOGGER.debug("Weather API raw payload: %s", payload)
        return payload

import asyncio
import logging

from weather_data import WeatherTransportError
from pixoo_weather.models import FETCH_ERROR_MESSAGE, Error, Idle, Loading, Success

LOGGER = logging.getLogger("pixoo_weather")


class WeatherStateStore:
    """Single owner of the current weather fetch state.

    Every `fetch` is tagged with a sequence number; only the most recently
    issued request may publish its outcome.
    """

    def __init__(self, weather_service, api_key: str):
        self.weather_service = weather_service
        self.api_key = api_key
        self._state = Idle()
        self._subscribers = []
        self._sequence = 0

    def observe(self):
        return self._state

    def subscribe(self, callback):
        """Register `callback(state)` for future updates and return an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _set_state(self, state) -> None:
        previous = self._state
        self._state = state
        LOGGER.info("Weather state: %s -> %s", previous.status.value, state.status.value)
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:  # noqa: BLE001
                LOGGER.exception("Weather state subscriber failed.")

    def fetch(self, city: str):
        """Mark the store as loading and return the coroutine that completes the fetch."""
        self._sequence += 1
        self._set_state(Loading())
        return self._complete_fetch(self._sequence, city)

    def is_latest(self, sequence: int) -> bool:
        return sequence == self._sequence

    async def _complete_fetch(self, sequence: int, city: str) -> None:
        try:
            snapshot = await asyncio.to_thread(self.weather_service.fetch_current_weather, self.api_key, city)
        except WeatherTransportError as exc:
            LOGGER.warning("Weather fetch failed for %r (%s): %s", city, exc.cause, exc)
            outcome = Error(FETCH_ERROR_MESSAGE)
        except Exception:  # noqa: BLE001
            LOGGER.exception("Unexpected error fetching weather for %r.", city)
            outcome = Error(FETCH_ERROR_MESSAGE)
        else:
            outcome = Success(snapshot)

        if not self.is_latest(sequence):
            LOGGER.debug("Discarding stale weather result for %r (request %s, latest %s).", city, sequence, self._sequence)
            return
        self._set_state(outcome)

from dataclasses import dataclass, field
from enum import Enum

FETCH_ERROR_MESSAGE = "Failed to fetch weather data"


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


def _section(data, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, dict):
        raise ValueError(f"Missing or invalid '{key}' object in weather payload.")
    return value


def _text(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"Weather field '{key}' must be a string, got {type(value).__name__}.")
    return value


def _number(data: dict, key: str) -> float | int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"Weather field '{key}' must be a number, got {type(value).__name__}.")
    return value


@dataclass(frozen=True)
class LocationInfo:
    name: str
    country: str
    localtime: str

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            name=_text(data, "name"),
            country=_text(data, "country"),
            localtime=_text(data, "localtime"),
        )


@dataclass(frozen=True)
class WeatherCondition:
    text: str
    icon_url: str

    @classmethod
    def from_dict(cls, data: dict):
        return cls(text=_text(data, "text"), icon_url=_text(data, "icon"))


@dataclass(frozen=True)
class CurrentConditions:
    feelslike_c: float | int
    humidity: float | int
    wind_kph: float | int
    pressure_mb: float | int
    uv: float | int
    condition: WeatherCondition

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            feelslike_c=_number(data, "feelslike_c"),
            humidity=_number(data, "humidity"),
            wind_kph=_number(data, "wind_kph"),
            pressure_mb=_number(data, "pressure_mb"),
            uv=_number(data, "uv"),
            condition=WeatherCondition.from_dict(_section(data, "condition")),
        )


@dataclass(frozen=True)
class WeatherSnapshot:
    location: LocationInfo
    current: CurrentConditions

    @classmethod
    def from_dict(cls, data: dict):
        """Map a `current.json` response body field for field.

        Raises KeyError or ValueError when the payload does not have the
        documented shape.
        """
        return cls(
            location=LocationInfo.from_dict(_section(data, "location")),
            current=CurrentConditions.from_dict(_section(data, "current")),
        )


@dataclass(frozen=True)
class Idle:
    status: FetchStatus = field(default=FetchStatus.IDLE, init=False)


@dataclass(frozen=True)
class Loading:
    status: FetchStatus = field(default=FetchStatus.LOADING, init=False)


@dataclass(frozen=True)
class Success:
    data: WeatherSnapshot
    status: FetchStatus = field(default=FetchStatus.SUCCESS, init=False)


@dataclass(frozen=True)
class Error:
    message: str
    status: FetchStatus = field(default=FetchStatus.ERROR, init=False)


FetchState = Idle | Loading | Success | Error

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import config as app_config

DISPLAY_MODES = {"pixoo", "console"}
DEFAULT_WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"


@dataclass(frozen=True)
class AppSettings:
    weather_api_key: str
    weather_api_base_url: str
    display_mode: str
    pixoo_ip: str
    pixoo_port: int
    pixoo_reconnect_seconds: int
    font_name: str
    font_path: str
    weather_view_seconds: int
    icon_dir: str
    log_level: str
    pixoo_startup_connect_timeout_seconds: int = 120


def _valid_log_level(level_name: str) -> bool:
    return isinstance(getattr(logging, str(level_name).upper(), None), int)


def validate_settings(settings: AppSettings) -> AppSettings:
    """Validate startup configuration and raise a clear error on invalid values."""
    errors = []

    if not str(settings.weather_api_key).strip():
        errors.append("WEATHER_API_KEY must be a non-empty string.")
    base_url = urlparse(str(settings.weather_api_base_url))
    if base_url.scheme not in {"http", "https"} or not base_url.netloc:
        errors.append("WEATHER_API_BASE_URL must be an absolute http(s) URL.")

    display_mode = str(settings.display_mode).lower()
    if display_mode not in DISPLAY_MODES:
        errors.append("DISPLAY_MODE must be 'pixoo' or 'console'.")

    if int(settings.weather_view_seconds) <= 0:
        errors.append("WEATHER_VIEW_SECONDS must be > 0.")
    if not _valid_log_level(settings.log_level):
        errors.append("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL (or equivalent).")

    if display_mode == "pixoo":
        if not str(settings.pixoo_ip).strip():
            errors.append("PIXOO_IP must be a non-empty string.")
        if int(settings.pixoo_port) < 1 or int(settings.pixoo_port) > 65535:
            errors.append("PIXOO_PORT must be between 1 and 65535.")
        if int(settings.pixoo_reconnect_seconds) <= 0:
            errors.append("PIXOO_RECONNECT_SECONDS must be > 0.")
        if int(settings.pixoo_startup_connect_timeout_seconds) <= 0:
            errors.append("PIXOO_STARTUP_CONNECT_TIMEOUT_SECONDS must be > 0.")
        if not str(settings.icon_dir).strip():
            errors.append("ICON_DIR must be a non-empty path.")
        if not Path(settings.font_path).expanduser().is_file():
            errors.append(f"FONT_PATH does not exist or is not a file: {settings.font_path}")

    if errors:
        raise ValueError("Invalid configuration:\n- " + "\n- ".join(errors))
    return settings


def load_settings(display_mode: str | None = None) -> AppSettings:
    """Read `config.py` into AppSettings; `display_mode` overrides DISPLAY_MODE when given."""
    try:
        settings = AppSettings(
            weather_api_key=app_config.WEATHER_API_KEY,
            weather_api_base_url=getattr(app_config, "WEATHER_API_BASE_URL", DEFAULT_WEATHER_API_BASE_URL),
            display_mode=display_mode or app_config.DISPLAY_MODE,
            pixoo_ip=app_config.PIXOO_IP,
            pixoo_port=app_config.PIXOO_PORT,
            pixoo_reconnect_seconds=app_config.PIXOO_RECONNECT_SECONDS,
            font_name=app_config.FONT_NAME,
            font_path=app_config.FONT_PATH,
            weather_view_seconds=app_config.WEATHER_VIEW_SECONDS,
            icon_dir=app_config.ICON_DIR,
            log_level=app_config.LOG_LEVEL,
            pixoo_startup_connect_timeout_seconds=getattr(app_config, "PIXOO_STARTUP_CONNECT_TIMEOUT_SECONDS", 120),
        )
    except AttributeError as exc:
        attr_match = re.search(r"has no attribute '([^']+)'", str(exc))
        missing_attr = attr_match.group(1) if attr_match else str(exc)
        raise ValueError(f"Invalid configuration:\n- Missing required config setting: {missing_attr}") from exc
    return validate_settings(settings)

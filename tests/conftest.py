import sys
import types


if "config" not in sys.modules:
    config = types.ModuleType("config")
    config.WEATHER_API_KEY = "test-key"
    config.WEATHER_API_BASE_URL = "https://weather.test/v1"
    config.DISPLAY_MODE = "console"
    config.PIXOO_IP = "127.0.0.1"
    config.PIXOO_PORT = 80
    config.PIXOO_RECONNECT_SECONDS = 5
    config.FONT_NAME = "splitflap"
    config.FONT_PATH = "./fonts/splitflap.bdf"
    config.WEATHER_VIEW_SECONDS = 5
    config.ICON_DIR = "weather_icons"
    config.LOG_LEVEL = "INFO"
    sys.modules["config"] = config

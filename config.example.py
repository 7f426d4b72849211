"""
Configuration settings for Pixoo Weather.

Copy this file to config.py and modify the values for your setup.
"""

# =============================================================================
# Weather API
# =============================================================================
# Free key from https://www.weatherapi.com/ (used for the current.json endpoint).
WEATHER_API_KEY = "your-weatherapi-key"
WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"

# =============================================================================
# Display
# =============================================================================
# "pixoo" draws on a Pixoo64 panel, "console" prints the screen in the terminal.
DISPLAY_MODE = "pixoo"

PIXOO_IP = "192.168.x.x"   # Replace with your Pixoo's IP address
PIXOO_PORT = 80
# Reconnect delay (seconds) when Pixoo is unreachable or drops from network.
PIXOO_RECONNECT_SECONDS = 60
# Give up at startup if the Pixoo cannot be reached within this many seconds.
PIXOO_STARTUP_CONNECT_TIMEOUT_SECONDS = 120

FONT_NAME = "splitflap"
FONT_PATH = "./fonts/splitflap.bdf"

# Seconds to show each page of the weather details before advancing.
WEATHER_VIEW_SECONDS = 5

# Downloaded condition icons are resized and kept here.
ICON_DIR = "weather_icons"

# =============================================================================
# Logging
# =============================================================================
# Standard Python logging level (e.g. DEBUG, INFO, WARNING, ERROR).
LOG_LEVEL = "INFO"

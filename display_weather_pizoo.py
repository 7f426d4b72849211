"""
Pixoo Weather Display

Type a city name at the prompt and the current conditions from WeatherAPI.com
are shown on a Pixoo64 LED display (or printed to the terminal in console
mode). The details are spread over several pages which the Pixoo loops
natively.

Prompt:
    <city>    type the city and press the keyboard search action
    <empty>   press the search button again with the current city
    /quit     exit (end-of-input works too)

Usage:
    python display_weather_pizoo.py
    python display_weather_pizoo.py --city London
    python display_weather_pizoo.py --console

Configuration:
    Copy config.example.py to config.py and set your WeatherAPI key and Pixoo IP address.
"""

import argparse
import asyncio
import logging
import sys
import threading

LOGGER = logging.getLogger("pixoo_weather")
QUIT_COMMAND = "/quit"


def _configure_logging(log_level: str) -> None:
    """Configure app logging with standard Python logging."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def _read_stdin_line():
    """Read one prompt line; None at end of input.

    The read runs on a daemon thread so shutdown never joins a blocked ``readline``.
    """
    loop = asyncio.get_running_loop()
    result = loop.create_future()

    def deliver(line):
        if not result.done():
            result.set_result(line)

    def reader():
        line = sys.stdin.readline()
        try:
            loop.call_soon_threadsafe(deliver, line)
        except RuntimeError:
            # Loop already closed; nobody is waiting for the line.
            pass

    threading.Thread(target=reader, name="weather-prompt-stdin", daemon=True).start()
    line = await result
    return line if line else None


async def run_prompt(controller, read_line=None, initial_city: str | None = None) -> None:
    """Drive the weather screen from prompt lines until /quit or end of input.

    End of input lets searches already running finish and show their result;
    /quit and interrupts cancel them.
    """
    read_line = read_line or _read_stdin_line
    controller.start()
    try:
        if initial_city:
            controller.update_input(initial_city)
            controller.on_search_action()
        while True:
            line = await read_line()
            if line is None:
                await controller.scope.join()
                break
            text = line.strip()
            if text == QUIT_COMMAND:
                break
            if text:
                controller.update_input(text)
                controller.on_search_action()
            else:
                controller.on_search_click()
    finally:
        controller.close()


def build_controller(settings, renderer=None):
    from pixoo_weather.controller import WeatherScreenController
    from pixoo_weather.services.weather_service import WeatherService
    from pixoo_weather.store import WeatherStateStore

    if renderer is None:
        if settings.display_mode.lower() == "console":
            from pixoo_weather.render.console_renderer import ConsoleRenderer
            renderer = ConsoleRenderer()
        else:
            from pixoo_weather.render.pixoo_renderer import PixooRenderer
            renderer = PixooRenderer(settings)
            renderer.connect(fail_fast=True)

    store = WeatherStateStore(WeatherService(base_url=settings.weather_api_base_url), api_key=settings.weather_api_key)
    return WeatherScreenController(store, renderer)


def main(argv=None) -> int:
    """Main function to run the weather display."""
    parser = argparse.ArgumentParser(description="Pixoo Weather Display")
    parser.add_argument("--city", help="City to look up as soon as the screen starts")
    parser.add_argument("--console", action="store_true",
                        help="Print the weather screen in the terminal instead of drawing on the Pixoo")
    args = parser.parse_args(argv)

    from pixoo_weather.settings import load_settings

    try:
        settings = load_settings(display_mode="console" if args.console else None)
    except ValueError as exc:
        _configure_logging("INFO")
        LOGGER.error("%s", exc)
        return 2

    _configure_logging(settings.log_level)
    LOGGER.info("Starting Pixoo Weather (%s display).", settings.display_mode)
    try:
        controller = build_controller(settings)
    except RuntimeError as exc:
        LOGGER.error("Startup failed: %s", exc)
        return 1

    try:
        asyncio.run(run_prompt(controller, initial_city=args.city))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted; exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

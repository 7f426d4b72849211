"""Connection to the Pixoo64 panel that shows the weather screen.

The weather renderer asks for a connected, font-loaded ``Pizzoo`` handle once
at startup (failing after PIXOO_STARTUP_CONNECT_TIMEOUT_SECONDS) and again
whenever a frame upload fails, in which case it waits for the panel forever.
"""

import logging
import socket
from time import monotonic, sleep

from pizzoo import Pizzoo

LOGGER = logging.getLogger("pixoo_weather")
PIXOO_HTTP_TIMEOUT_SECONDS = 5.0
_PIXOO_POST_TIMEOUT_PATCHED = False


def _install_pizzoo_http_timeout_patch(timeout_seconds: float = PIXOO_HTTP_TIMEOUT_SECONDS) -> None:
    """Make pizzoo's frame uploads give up after ``timeout_seconds``.

    Uploads run on the prompt's event loop thread, so an unbounded post would
    freeze the prompt along with the panel.
    """
    global _PIXOO_POST_TIMEOUT_PATCHED
    if _PIXOO_POST_TIMEOUT_PATCHED:
        return
    try:
        import pizzoo._renderers as pizzoo_renderers
    except ImportError as exc:
        LOGGER.warning("Weather frames will upload without a timeout: %s", exc)
        return

    upload = getattr(pizzoo_renderers, "post", None)
    if not callable(upload):
        LOGGER.warning("Weather frames will upload without a timeout: pizzoo has no renderer post.")
        return

    def upload_with_timeout(*args, **kwargs):
        kwargs.setdefault("timeout", timeout_seconds)
        return upload(*args, **kwargs)

    pizzoo_renderers.post = upload_with_timeout
    _PIXOO_POST_TIMEOUT_PATCHED = True
    LOGGER.info("Pixoo frame uploads time out after %ss.", timeout_seconds)


class PixooClient:
    """Opens the panel and loads the single font the weather pages are drawn in.

    ``pizzoo_factory``, ``sleep_fn`` and ``clock_fn`` replace the device, the
    retry pause and the startup deadline clock.
    """

    def __init__(self, settings, pizzoo_factory=None, sleep_fn=None, clock_fn=None):
        self.settings = settings
        self.pizzoo_factory = pizzoo_factory or (lambda ip: Pizzoo(ip, debug=True))
        self.sleep_fn = sleep_fn or sleep
        self.clock_fn = clock_fn or monotonic

    @property
    def address(self) -> str:
        return f"{self.settings.pixoo_ip}:{self.settings.pixoo_port}"

    def _load_font(self, pixoo) -> None:
        try:
            pixoo.load_font(self.settings.font_name, self.settings.font_path)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to load font '{self.settings.font_name}' from '{self.settings.font_path}': {exc}"
            ) from exc

    def connect_with_retry(self, fail_fast: bool = False):
        """Return a ready ``Pizzoo``; a font error is never retried."""
        _install_pizzoo_http_timeout_patch()
        deadline = None
        if fail_fast:
            deadline = self.clock_fn() + float(self.settings.pixoo_startup_connect_timeout_seconds)
        attempt = 0
        while True:
            attempt += 1
            try:
                LOGGER.info("Connecting to Pixoo weather panel at %s (attempt %s)...", self.address, attempt)
                pixoo = self.pizzoo_factory(self.settings.pixoo_ip)
                self._load_font(pixoo)
                LOGGER.info("Pixoo weather panel ready.")
                return pixoo
            except RuntimeError:
                raise
            except Exception as exc:
                if deadline is not None and self.clock_fn() >= deadline:
                    raise RuntimeError(
                        f"Failed to connect to Pixoo at {self.address} within "
                        f"{self.settings.pixoo_startup_connect_timeout_seconds}s: {exc}"
                    ) from exc
                LOGGER.warning("Pixoo unavailable (%s). Retrying in %ss...", exc, self.settings.pixoo_reconnect_seconds)
                self.sleep_fn(self.settings.pixoo_reconnect_seconds)

    def is_reachable(self, timeout_seconds: float = 2.0) -> bool:
        """Cheap TCP check the renderer runs before each weather screen."""
        try:
            with socket.create_connection((self.settings.pixoo_ip, self.settings.pixoo_port), timeout=timeout_seconds):
                return True
        except OSError:
            return False

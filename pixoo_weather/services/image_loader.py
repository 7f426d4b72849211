"""Condition icon download/resize utilities."""

import hashlib
import logging
from io import BytesIO
from pathlib import Path

import requests
from PIL import Image

LOGGER = logging.getLogger("pixoo_weather")
ICON_HTTP_TIMEOUT_SECONDS = 5


class IconLoader:
    """Download remote condition icons once and keep panel-sized PNG copies on disk."""

    def __init__(self, icon_dir: str | Path, size: int = 24, session=None, bg_color=(16, 36, 63, 255)):
        self.icon_dir = Path(icon_dir)
        self.size = int(size)
        self.session = session or requests.Session()
        self.bg_color = bg_color

    def _icon_path(self, url: str) -> Path:
        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:16]
        return self.icon_dir / f"{digest}_{self.size}.png"

    def _resize_icon_bytes(self, icon_bytes: bytes) -> bytes:
        src = Image.open(BytesIO(icon_bytes)).convert("RGBA")
        background = Image.new("RGBA", src.size, self.bg_color)
        background.paste(src, mask=src.split()[3])
        resized = background.resize((self.size, self.size), resample=Image.LANCZOS)
        out = BytesIO()
        resized.convert("RGB").save(out, format="PNG", optimize=True)
        return out.getvalue()

    def load(self, url: str) -> str | None:
        """Return a local PNG path for `url`, or None when the icon is unavailable."""
        if not url:
            return None
        path = self._icon_path(url)
        if path.exists():
            return str(path)

        try:
            response = self.session.get(url, timeout=ICON_HTTP_TIMEOUT_SECONDS)
            response.raise_for_status()
            icon_bytes = self._resize_icon_bytes(response.content)
        except (requests.RequestException, OSError, ValueError) as exc:
            LOGGER.warning("Condition icon unavailable (%s): %s", url, exc)
            return None

        self.icon_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(icon_bytes)
        return str(path)

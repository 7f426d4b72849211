import logging
from pathlib import Path

from PIL import Image


COLOR_SEPARATOR = "#2F6EA4"
DEBUG_RENDER_GIF_PATH = Path("debug/current_pixoo_render.gif")
PANEL_SIZE = 64
CHARS_PER_LINE = 10

LOGGER = logging.getLogger("pixoo_weather")


def measure_text_width(text: str) -> int:
    return max(1, len(str(text)) * 6 - 1)


def center_x(rect_width: int, text: str) -> int:
    return max(0, (rect_width - measure_text_width(text)) // 2)


def fit_text(text: str, max_chars: int = CHARS_PER_LINE) -> str:
    return str(text)[:max_chars]


def wrap_text(text: str, max_chars: int = CHARS_PER_LINE) -> list[str]:
    """Greedy word wrap; words longer than a line are cut into line-sized pieces."""
    lines = []
    current = ""
    for word in str(text).split():
        while len(word) > max_chars:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:max_chars])
            word = word[max_chars:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def draw_separator_line(pizzoo, y: int, style: str = "solid") -> None:
    if style == "solid":
        pizzoo.draw_rectangle(xy=(0, y), width=PANEL_SIZE, height=1, color=COLOR_SEPARATOR, filled=True)
    elif style == "dashed":
        for x in range(0, PANEL_SIZE, 4):
            pizzoo.draw_rectangle(xy=(x, y), width=2, height=1, color=COLOR_SEPARATOR, filled=True)


def dump_render_debug_gif(pizzoo, frame_speed: int, output_path: Path = DEBUG_RENDER_GIF_PATH) -> bool:
    """
    Persist the current Pizzoo frame buffer as a single debug GIF.

    Returns True on successful write. Returns False when no compatible frame
    buffer is available (for example during unit tests using RecordingPizzoo).
    """
    buffer = getattr(pizzoo, "_Pizzoo__buffer", None)
    size = getattr(pizzoo, "size", None)
    if not isinstance(buffer, list) or not buffer:
        return False
    try:
        size = int(size)
    except (TypeError, ValueError):
        return False

    expected_len = size * size * 3
    images = []
    for frame in buffer:
        if not isinstance(frame, list) or len(frame) != expected_len:
            return False
        images.append(Image.frombytes("RGB", (size, size), bytes(frame), "raw"))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    images[0].save(
        output_path,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        loop=0,
        duration=max(1, int(frame_speed)),
    )
    LOGGER.info("Saved render debug GIF: %s (%s frames)", output_path, len(images))
    return True


def ensure_clean_render_buffer(pizzoo) -> None:
    """
    Reset render buffer before drawing to avoid frame accumulation after failures.

    The upstream `pizzoo` object can retain buffered frames if `render()` fails
    before it resets internal state.
    """
    reset_buffer = getattr(pizzoo, "reset_buffer", None)
    if not callable(reset_buffer):
        return
    try:
        removed = int(reset_buffer())
    except Exception:  # noqa: BLE001
        return
    if removed > 1:
        LOGGER.warning("Recovered stale Pixoo frame buffer before render (%s old frames removed).", removed)

import logging
from dataclasses import dataclass

from .common import (
    PANEL_SIZE,
    center_x,
    dump_render_debug_gif,
    ensure_clean_render_buffer,
    fit_text,
    wrap_text,
)
from .tree import Card, Column, Image, ProgressIndicator, Row, Text, TextField

LOGGER = logging.getLogger("pixoo_weather")

COLOR_WX_BG = "#10243F"
COLOR_WX_ACCENT = "#2F6EA4"
COLOR_WX_TEXT = "#EAF6FF"
COLOR_WX_MUTED = "#A8C7DE"
COLOR_PROGRESS = "#FFD166"
MUTED_STYLES = {"label", "subtitle"}

HEADER_HEIGHT = 11
BODY_TOP = 13
BODY_HEIGHT = PANEL_SIZE - BODY_TOP
LINE_HEIGHT = 12
ICON_SIZE = 24
ICON_SLOT_HEIGHT = ICON_SIZE + 2
PROGRESS_X = 8
PROGRESS_WIDTH = 48
PROGRESS_SEGMENT = 12
PROGRESS_FRAMES = 8
PROGRESS_FRAME_SPEED = 150
# The panel font has no degree glyph.
PANEL_TEXT_REPLACEMENTS = {"°": ""}


def panel_text(text: str) -> str:
    text = str(text)
    for src, dst in PANEL_TEXT_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text


@dataclass(frozen=True)
class PanelItem:
    kind: str
    value: str = ""
    color: str = COLOR_WX_TEXT

    @property
    def height(self) -> int:
        return ICON_SLOT_HEIGHT if self.kind == "icon" else LINE_HEIGHT


def layout_pages(tree):
    """Flatten a widget tree into (header_text, pages) for the 64x64 panel.

    Each `Card` starts a new page; other content flows onto the next page when
    the body area is full.
    """
    header = ""
    pages = [[]]
    used = 0

    def place(item: PanelItem) -> None:
        nonlocal used
        if pages[-1] and used + item.height > BODY_HEIGHT:
            pages.append([])
            used = 0
        pages[-1].append(item)
        used += item.height

    def page_break() -> None:
        nonlocal used
        if pages[-1]:
            pages.append([])
            used = 0

    def visit(node) -> None:
        nonlocal header
        if isinstance(node, TextField):
            header = node.value or node.label
        elif isinstance(node, Text):
            color = COLOR_WX_MUTED if node.style in MUTED_STYLES else COLOR_WX_TEXT
            for line in wrap_text(panel_text(node.text)):
                place(PanelItem("text", line, color))
        elif isinstance(node, Image):
            place(PanelItem("icon", node.url))
        elif isinstance(node, ProgressIndicator):
            place(PanelItem("progress"))
        elif isinstance(node, Card):
            page_break()
            for child in node.children:
                visit(child)
        elif isinstance(node, (Row, Column)):
            for child in node.children:
                visit(child)

    visit(tree)
    return header, pages


def draw_progress_bar(pizzoo, y: int, step: int) -> None:
    pizzoo.draw_rectangle(xy=(PROGRESS_X, y + 4), width=PROGRESS_WIDTH, height=4, color=COLOR_WX_ACCENT, filled=True)
    travel = PROGRESS_WIDTH - PROGRESS_SEGMENT
    offset = (step % PROGRESS_FRAMES) * travel // max(1, PROGRESS_FRAMES - 1)
    pizzoo.draw_rectangle(
        xy=(PROGRESS_X + offset, y + 4),
        width=PROGRESS_SEGMENT,
        height=4,
        color=COLOR_PROGRESS,
        filled=True,
    )


def draw_page(pizzoo, settings, header: str, items, icon_paths: dict, progress_step: int = 0) -> None:
    """Draw one panel page: header bar with the city field, then the body items top to bottom."""
    header_text = fit_text(panel_text(header) or "City")

    pizzoo.cls()
    pizzoo.draw_rectangle(xy=(0, 0), width=PANEL_SIZE, height=PANEL_SIZE, color=COLOR_WX_BG, filled=True)
    pizzoo.draw_rectangle(xy=(0, 0), width=PANEL_SIZE, height=HEADER_HEIGHT, color=COLOR_WX_ACCENT, filled=True)
    pizzoo.draw_text(header_text, xy=(2, -1), font=settings.font_name, color=COLOR_WX_TEXT)

    y = BODY_TOP
    for item in items:
        if item.kind == "text":
            pizzoo.draw_text(item.value, xy=(center_x(PANEL_SIZE, item.value), y), font=settings.font_name, color=item.color)
        elif item.kind == "icon":
            icon_path = icon_paths.get(item.value)
            if icon_path:
                pizzoo.draw_image(icon_path, xy=((PANEL_SIZE - ICON_SIZE) // 2, y + 1), size=(ICON_SIZE, ICON_SIZE))
        elif item.kind == "progress":
            draw_progress_bar(pizzoo, y, progress_step)
        y += item.height


def build_and_send_weather_screen(pizzoo, settings, tree, icon_loader=None) -> int:
    """Lay out `tree`, draw every page as a frame and push the animation. Returns the frame count."""
    ensure_clean_render_buffer(pizzoo)
    header, pages = layout_pages(tree)

    icon_paths = {}
    for page in pages:
        for item in page:
            if item.kind == "icon" and item.value not in icon_paths:
                icon_paths[item.value] = icon_loader.load(item.value) if icon_loader else None

    has_progress = any(item.kind == "progress" for page in pages for item in page)
    steps = PROGRESS_FRAMES if has_progress else 1
    frames = [(page, step) for page in pages for step in range(steps)]
    for index, (page, step) in enumerate(frames):
        if index:
            pizzoo.add_frame()
        draw_page(pizzoo, settings, header, page, icon_paths, progress_step=step)

    frame_speed = PROGRESS_FRAME_SPEED if has_progress else max(500, int(settings.weather_view_seconds * 1000))
    LOGGER.info("Sending weather screen (%s frames, %sms per frame).", len(frames), frame_speed)
    dump_render_debug_gif(pizzoo, frame_speed)
    pizzoo.render(frame_speed=frame_speed)
    return len(frames)


class PixooRenderer:
    def __init__(self, settings, pixoo_service=None, icon_loader=None):
        self.settings = settings
        if pixoo_service is None:
            from pixoo_weather.services.pixoo_client import PixooClient
            pixoo_service = PixooClient(settings)
        if icon_loader is None:
            from pixoo_weather.services.image_loader import IconLoader
            icon_loader = IconLoader(settings.icon_dir, size=ICON_SIZE)
        self.pixoo_service = pixoo_service
        self.icon_loader = icon_loader
        self.pizzoo = None

    def connect(self, fail_fast: bool = False) -> None:
        self.pizzoo = self.pixoo_service.connect_with_retry(fail_fast=fail_fast)

    def render(self, tree) -> None:
        if self.pizzoo is None:
            self.connect()
        elif not self.pixoo_service.is_reachable():
            LOGGER.warning("Pixoo offline; waiting for reconnect before drawing weather screen.")
            self.connect()
        try:
            build_and_send_weather_screen(self.pizzoo, self.settings, tree, self.icon_loader)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Lost Pixoo connection while rendering weather screen (%s).", exc)
            self.connect()
            build_and_send_weather_screen(self.pizzoo, self.settings, tree, self.icon_loader)

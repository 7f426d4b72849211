"""Toolkit-independent widget nodes produced by the view and consumed by renderers."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Text:
    text: str
    style: str = "body"


@dataclass(frozen=True)
class TextField:
    value: str
    label: str
    leading_icon: str | None = None
    ime_action: str = "search"


@dataclass(frozen=True)
class IconButton:
    icon: str
    content_description: str


@dataclass(frozen=True)
class Image:
    url: str
    content_description: str


@dataclass(frozen=True)
class ProgressIndicator:
    pass


@dataclass(frozen=True)
class Row:
    children: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Column:
    children: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Card:
    children: tuple = field(default_factory=tuple)


CONTAINER_TYPES = (Row, Column, Card)


def iter_nodes(node):
    """Yield `node` and all of its descendants, depth first."""
    yield node
    if isinstance(node, CONTAINER_TYPES):
        for child in node.children:
            yield from iter_nodes(child)


def collect_text(node) -> list[str]:
    return [item.text for item in iter_nodes(node) if isinstance(item, Text)]

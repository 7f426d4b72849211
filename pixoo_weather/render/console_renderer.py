import sys

from .tree import Card, Column, IconButton, Image, ProgressIndicator, Row, Text, TextField

INDENT = "  "


def render_lines(node, depth: int = 0) -> list[str]:
    """Plain-text rendition of a widget tree, one line per leaf."""
    pad = INDENT * depth
    if isinstance(node, TextField):
        return [f"{pad}[{node.label}: {node.value}]"]
    if isinstance(node, IconButton):
        return [f"{pad}({node.content_description})"]
    if isinstance(node, Text):
        return [f"{pad}{node.text}"]
    if isinstance(node, Image):
        return [f"{pad}<{node.content_description}: {node.url}>"]
    if isinstance(node, ProgressIndicator):
        return [f"{pad}Loading..."]
    if isinstance(node, Row):
        texts = [line.strip() for child in node.children for line in render_lines(child)]
        return [pad + "  ".join(texts)]
    if isinstance(node, Card):
        border = pad + "+" + "-" * 30
        inner = [line for child in node.children for line in render_lines(child, depth + 1)]
        return [border, *inner, border]
    if isinstance(node, Column):
        return [line for child in node.children for line in render_lines(child, depth)]
    raise TypeError(f"Unknown widget node: {node!r}")


class ConsoleRenderer:
    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def render(self, tree) -> None:
        self.stream.write("\n".join(render_lines(tree)) + "\n")
        self.stream.flush()

"""
Markup rendering for Combine node trees.

The depth-first walk an embedding application runs over a built tree:
opening tag, children, closing tag. Plus small lookup and debug helpers.

This is the only place that consults the user's config file and COMBINE_*
environment; pass a RenderConfig explicitly to bypass them.
"""

from __future__ import annotations

from collections.abc import Iterator

from .config import RenderConfig, get_config
from .node import Node


def iter_markup(root: Node, config: RenderConfig | None = None, depth: int = 0) -> Iterator[tuple[int, str]]:
    """Yield (depth, fragment) pairs: tag start, children, tag end."""
    if config is None:
        config = get_config().render
    yield depth, root.get_html_tag_start(config)
    for child in root.get_children():
        yield from iter_markup(child, config, depth + 1)
    yield depth, root.get_html_tag_end(config)


def render_html(root: Node, indent: int | None = None, config: RenderConfig | None = None) -> str:
    """
    Render a whole tree to markup.

    indent=0 concatenates fragments on one line; a positive indent puts each
    tag on its own line, indented by depth. Defaults to config.indent.
    """
    if config is None:
        config = get_config().render
    if indent is None:
        indent = config.indent
    if indent <= 0:
        return "".join(fragment for _, fragment in iter_markup(root, config))
    return "\n".join(" " * (indent * depth) + fragment for depth, fragment in iter_markup(root, config))


def print_tree(node: Node, indent: int = 0) -> str:
    """Debug dump: one line per node with its kind and mixin names."""
    lines: list[str] = []
    _dump(node, indent, lines)
    return "\n".join(lines)


def _dump(node: Node, indent: int, lines: list[str]) -> None:
    kind = "block" if node.is_block else "element"
    line = f"{' ' * indent}{node.name} ({kind})"
    mixins = node.get_mixins()
    if mixins:
        line += " + " + ", ".join(m.name for m in mixins)
    lines.append(line)
    for child in node.get_children():
        _dump(child, indent + 2, lines)


def find_by_name(root: Node, name: str) -> Node | None:
    """First node in depth-first order with the given name."""
    for node in root.depth_first():
        if node.name == name:
            return node
    return None


def collect_blocks(root: Node) -> dict[str, Node]:
    """Collect block nodes into a lookup dict; the first occurrence of a name wins."""
    blocks: dict[str, Node] = {}
    for node in root.depth_first():
        if node.is_block and node.name not in blocks:
            blocks[node.name] = node
    return blocks

"""
Node - the BEM node model for Combine

One node per position in a UI tree. The name decides, once, whether the node
is a block (capitalized) or an element. Properties live in namespaces
("html", "css", ...). Mixins are other nodes whose properties are folded into
this node's rendering, lowest priority first:

    [self, mixin_1, mixin_2, ...]   later entries win per key

Key invariant: is_block XOR is_element, fixed at construction.

Children are owned, mixins are only referenced: the same node may be a mixin
of many others, and mixin lists may form cycles. Every fold below looks at
one level of mixins only, so cycles terminate.

Not safe for concurrent mutation; safe for concurrent reads once built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .case import kebab
from .config import RenderConfig
from .props import PropertyBag

logger = logging.getLogger(__name__)

HTML_NS = "html"
CSS_NS = "css"

DEFAULT_RENDER = RenderConfig()


@dataclass(eq=False)
class Node:
    """A named node in the UI tree."""
    name: str
    properties: PropertyBag = field(default_factory=PropertyBag, init=False, repr=False)
    children: list[Node] = field(default_factory=list, init=False, repr=False)
    mixins: list[Node] = field(default_factory=list, init=False, repr=False)
    directives: dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _is_block: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        # "" has no first character; it classifies as an element
        self._is_block = bool(self.name) and self.name[0].lower() != self.name[0]

    # -- classification (read-only) --

    @property
    def is_block(self) -> bool:
        return self._is_block

    @property
    def is_element(self) -> bool:
        return not self._is_block

    @property
    def block_name(self) -> str:
        return self.name if self._is_block else ""

    @property
    def element_name(self) -> str:
        return "" if self._is_block else self.name

    # -- tree --

    def add_child(self, child: Node) -> Node:
        """Append a child node and return it for chaining."""
        _require_node(child, "child")
        self.children.append(child)
        return child

    def set_children(self, nodes: Iterable[Node]) -> None:
        """Replace the whole child list."""
        nodes = list(nodes)
        for node in nodes:
            _require_node(node, "child")
        self.children = nodes

    def get_children(self) -> list[Node]:
        return self.children

    def has_children(self) -> bool:
        return len(self.children) > 0

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    # -- mixins --

    def add_mixin(self, node: Node) -> None:
        """Append a mixin; the most recently added one has the highest priority."""
        _require_node(node, "mixin")
        if node is self or any(m is self for m in node.mixins):
            logger.debug("mixin cycle: %r <-> %r", self.name, node.name)
        self.mixins.append(node)

    def get_mixins(self) -> list[Node]:
        """Mixins in priority order, low to high. Not a copy."""
        return self.mixins

    def get_all_mixed_nodes(self) -> list[Node]:
        """This node followed by its mixins: the order every fold runs in."""
        return [self, *self.mixins]

    # -- directives --

    def add_directive(self, name: str, directive: Any) -> None:
        self.directives[name] = directive

    def get_directive(self, name: str) -> Any:
        return self.directives.get(name)

    def has_directive(self, name: str) -> bool:
        return name in self.directives

    def get_directives(self) -> dict[str, Any]:
        return self.directives

    # -- properties --

    def set_property(self, namespace: str, name: str, value: Any) -> None:
        self.properties.set(namespace, name, value)

    def get_property_namespace(self, namespace: str) -> dict[str, Any] | None:
        return self.properties.namespace(namespace)

    def has_property_namespace(self, namespace: str) -> bool:
        return self.properties.has_namespace(namespace)

    def get_property(self, namespace: str, name: str) -> Any:
        """
        Unchecked lookup. The namespace must exist, otherwise
        MissingNamespaceError is raised. Use has_property() first.
        """
        return self.properties.get(namespace, name)

    def has_property(self, namespace: str, name: str) -> bool:
        return self.properties.has(namespace, name)

    # -- rendering --
    # Every method takes an optional RenderConfig and falls back to the
    # defaults; nothing here reads files or the environment.

    def get_html_tag(self, config: RenderConfig | None = None) -> str:
        """Tag from the highest-priority mixed node that sets ("html", "tag")."""
        tag = (config or DEFAULT_RENDER).default_tag
        for node in self.get_all_mixed_nodes():
            if node.has_property(HTML_NS, "tag"):
                tag = node.get_property(HTML_NS, "tag")
        return tag

    def get_css_mixed_rules(self, config: RenderConfig | None = None) -> str:
        """
        Merge the "css" namespace of every mixed node (last writer wins per
        key) and render it as "key:value;key:value" with kebab-case keys.

        Keys come out in first-insertion order of the merged mapping unless
        sort_css_rules is set.
        """
        merged: dict[str, Any] = {}
        for node in self.get_all_mixed_nodes():
            rules = node.get_property_namespace(CSS_NS)
            if rules is not None:
                merged.update(rules)

        pairs = [(kebab(key), value) for key, value in merged.items()]
        if (config or DEFAULT_RENDER).sort_css_rules:
            pairs.sort(key=lambda pair: pair[0])
        return ";".join(f"{key}:{value}" for key, value in pairs)

    def get_html_class(self, config: RenderConfig | None = None) -> str:
        """BEM class of this node alone, ignoring mixins."""
        if self.is_block:
            return kebab(self.block_name)
        return self._element_class(config or DEFAULT_RENDER)

    def _element_class(self, config: RenderConfig) -> str:
        # An element carries no block name of its own, so a standalone
        # element renders as "__name" with an empty block part.
        return kebab(self.block_name) + config.element_separator + kebab(self.element_name)

    def get_html_mixed_class(self, config: RenderConfig | None = None) -> str:
        """Classes of all mixed nodes, space-joined, in order, duplicates kept."""
        return " ".join(node.get_html_class(config) for node in self.get_all_mixed_nodes())

    def get_attributes(self, config: RenderConfig | None = None) -> dict[str, str]:
        """Rendered attributes in output order: class, then style."""
        return {
            "class": self.get_html_mixed_class(config),
            "style": self.get_css_mixed_rules(config),
        }

    def get_attributes_string(self, config: RenderConfig | None = None) -> str:
        """'name="value"' pairs for the non-empty attributes, space-joined."""
        return " ".join(
            f'{name}="{value}"' for name, value in self.get_attributes(config).items() if value
        )

    def get_html_tag_start(self, config: RenderConfig | None = None) -> str:
        """
        Opening tag. The space before the attributes is always emitted, so a
        node without attributes renders as "<div >" unless
        compact_empty_tags is set.
        """
        tag = self.get_html_tag(config)
        attrs = self.get_attributes_string(config)
        if not attrs and (config or DEFAULT_RENDER).compact_empty_tags:
            return f"<{tag}>"
        return f"<{tag} {attrs}>"

    def get_html_tag_end(self, config: RenderConfig | None = None) -> str:
        return f"</{self.get_html_tag(config)}>"

    def __repr__(self) -> str:
        kind = "block" if self.is_block else "element"
        return f"Node({self.name!r}, {kind}, children={len(self.children)}, mixins={len(self.mixins)})"


def _require_node(value: object, role: str) -> None:
    if not isinstance(value, Node):
        raise TypeError(f"{role} must be a Node, got {type(value).__name__}")

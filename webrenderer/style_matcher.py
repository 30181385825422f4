"""Resolve the computed style of document nodes from a parsed stylesheet."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union

from .css_parser import (
    AttributeSelector,
    ClassSelector,
    DescendantSelector,
    IdSelector,
    PseudoClassSelector,
    Selector,
    StyleRule,
    StyleSheet,
    TagSelector,
    UniversalSelector,
)
from .dom_tree import DomTree

logger = logging.getLogger(__name__)

COLOR_NAMES = frozenset(
    {
        "red", "blue", "green", "yellow", "orange", "purple", "pink", "black",
        "white", "gray", "grey", "brown", "cyan", "magenta", "lime", "maroon",
        "navy", "olive", "silver", "teal", "aqua", "fuchsia", "transparent",
    }
)

INHERITABLE_PROPERTIES = (
    "color",
    "font-family",
    "font-size",
    "font-weight",
    "font-style",
    "line-height",
    "text-align",
    "text-decoration",
    "letter-spacing",
    "word-spacing",
    "white-space",
    "visibility",
)


class StyleKind(enum.Enum):
    """The category a computed style value belongs to."""

    STRING = "string"
    COLOR = "color"
    LENGTH = "length"
    PERCENTAGE = "percentage"
    NUMBER = "number"
    BOOLEAN = "boolean"
    AUTO = "auto"
    INHERIT = "inherit"


@dataclass(frozen=True)
class StyleValue:
    """A typed style value; ``value`` is None for ``auto`` and ``inherit``."""

    kind: StyleKind
    value: Union[str, float, bool, None] = None

    def as_string(self) -> Optional[str]:
        if self.kind in (StyleKind.STRING, StyleKind.COLOR):
            return self.value  # type: ignore[return-value]
        return None

    def as_length(self) -> Optional[float]:
        return self.value if self.kind is StyleKind.LENGTH else None  # type: ignore[return-value]

    def as_number(self) -> Optional[float]:
        return self.value if self.kind is StyleKind.NUMBER else None  # type: ignore[return-value]


@dataclass
class ComputedStyle:
    """The resolved properties of one node."""

    properties: dict[str, StyleValue] = field(default_factory=dict)


def _parse_float(text: str) -> Optional[float]:
    if not text or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def parse_style_value(value: str) -> StyleValue:
    """Classify a raw CSS value into a :class:`StyleValue`."""
    value = value.strip()

    if value == "auto":
        return StyleValue(StyleKind.AUTO)
    if value == "inherit":
        return StyleValue(StyleKind.INHERIT)
    if value == "true":
        return StyleValue(StyleKind.BOOLEAN, True)
    if value == "false":
        return StyleValue(StyleKind.BOOLEAN, False)

    if value.startswith("#") or value.startswith("rgb"):
        return StyleValue(StyleKind.COLOR, value)
    if value.lower() in COLOR_NAMES:
        return StyleValue(StyleKind.COLOR, value)

    if value.endswith("%"):
        number = _parse_float(value[:-1])
        if number is None:
            return StyleValue(StyleKind.STRING, value)
        return StyleValue(StyleKind.PERCENTAGE, number)

    # "rem" values end in "em" too and therefore fall into the em branch,
    # where the leftover "r" makes them plain strings.
    for suffix in ("px", "em"):
        if value.endswith(suffix):
            number = _parse_float(value[: -len(suffix)].strip())
            if number is None:
                return StyleValue(StyleKind.STRING, value)
            return StyleValue(StyleKind.LENGTH, number)

    number = _parse_float(value)
    if number is not None:
        return StyleValue(StyleKind.NUMBER, number)

    return StyleValue(StyleKind.STRING, value)


def _parse_inline_style(style_attr: str) -> dict[str, StyleValue]:
    declarations: dict[str, StyleValue] = {}
    for item in style_attr.split(";"):
        item = item.strip()
        if not item or ":" not in item:
            continue
        prop, _, raw = item.partition(":")
        declarations[prop.strip()] = parse_style_value(raw.strip())
    return declarations


def _matches_pseudo_class(tree: DomTree, node_id: int, pseudo: str) -> bool:
    if pseudo in ("hover", "active", "focus", "visited"):
        # Interaction states are never set, so these never match.
        return False

    node = tree.get_node(node_id)
    if node is None:
        return False
    parent = tree.get_node(node.parent) if node.parent is not None else None

    if pseudo == "first-child":
        return parent is not None and bool(parent.children) and parent.children[0] == node_id
    if pseudo == "last-child":
        return parent is not None and bool(parent.children) and parent.children[-1] == node_id
    if pseudo.startswith("nth-child(") and pseudo.endswith(")"):
        inner = pseudo[len("nth-child("):-1]
        digits = inner[1:] if inner.startswith("+") else inner
        if not digits.isascii() or not digits.isdigit():
            return False
        n = int(digits)
        if n < 1 or parent is None:
            return False
        position = parent.children.index(node_id) + 1 if node_id in parent.children else 0
        return position == n

    logger.warning("Unknown pseudo-class: :%s", pseudo)
    return False


def _matches_simple(tree: DomTree, node_id: int, selector: Selector) -> bool:
    """Match one selector against one node; descendant selectors always match."""
    node = tree.get_node(node_id)
    if node is None:
        return False
    if isinstance(selector, UniversalSelector):
        return True
    if isinstance(selector, TagSelector):
        return node.tag_name == selector.name
    if isinstance(selector, IdSelector):
        return node.get_attr("id") == selector.name
    if isinstance(selector, ClassSelector):
        return selector.name in node.classes
    if isinstance(selector, AttributeSelector):
        return node.get_attr(selector.name) == selector.value
    if isinstance(selector, PseudoClassSelector):
        return _matches_pseudo_class(tree, node_id, selector.name)
    if isinstance(selector, DescendantSelector):
        return True
    return False


def _has_matching_ancestor(tree: DomTree, node_id: int, selector: Selector) -> bool:
    node = tree.get_node(node_id)
    while node is not None and node.parent is not None:
        if _matches_simple(tree, node.parent, selector):
            return True
        node = tree.get_node(node.parent)
    return False


def _matches(tree: DomTree, node_id: int, selector: Selector) -> bool:
    if tree.get_node(node_id) is None:
        return False
    if isinstance(selector, DescendantSelector):
        return _matches(tree, node_id, selector.descendant) and _has_matching_ancestor(
            tree, node_id, selector.ancestor
        )
    return _matches_simple(tree, node_id, selector)


class StyleMatcher:
    """Computes node styles from a stylesheet, inline styles and inheritance."""

    def __init__(self, stylesheet: StyleSheet) -> None:
        self.stylesheet = stylesheet

    def _rule_matches(self, tree: DomTree, node_id: int, rule: StyleRule) -> bool:
        # Every part of a compound selector must match.
        return all(_matches(tree, node_id, s) for s in rule.selectors)

    def compute_style(self, tree: DomTree, node_id: int) -> ComputedStyle:
        """Compute the style of a node; unknown nodes get an empty style."""
        style = ComputedStyle()
        node = tree.get_node(node_id)
        if node is None:
            return style

        matching = [r for r in self.stylesheet.rules if self._rule_matches(tree, node_id, r)]
        matching.sort(key=lambda r: (r.specificity, len(r.declarations)))
        for rule in matching:
            for decl in rule.declarations:
                style.properties[decl.property] = parse_style_value(decl.value)

        inline = node.get_attr("style")
        if inline is not None:
            style.properties.update(_parse_inline_style(inline))

        if node.parent is not None:
            parent_style = self.compute_style(tree, node.parent)
            for prop in INHERITABLE_PROPERTIES:
                if prop not in style.properties and prop in parent_style.properties:
                    style.properties[prop] = parent_style.properties[prop]

        return style

    def get_property(self, style: ComputedStyle, prop: str) -> Optional[StyleValue]:
        return style.properties.get(prop)

    def get_property_or_default(self, style: ComputedStyle, prop: str, default: str) -> str:
        """Return a property as CSS text, or ``default`` when it is unset."""
        value = style.properties.get(prop)
        if value is None:
            return default
        kind = value.kind
        if kind in (StyleKind.STRING, StyleKind.COLOR):
            return value.value  # type: ignore[return-value]
        if kind is StyleKind.LENGTH:
            return f"{_format_float(value.value)}px"  # type: ignore[arg-type]
        if kind is StyleKind.PERCENTAGE:
            return f"{_format_float(value.value)}%"  # type: ignore[arg-type]
        if kind is StyleKind.NUMBER:
            return _format_float(value.value)  # type: ignore[arg-type]
        if kind is StyleKind.BOOLEAN:
            return "true" if value.value else "false"
        if kind is StyleKind.AUTO:
            return "auto"
        return "inherit"
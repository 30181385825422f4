"""CSS stylesheet parsing: selectors, declarations, rules and @keyframes."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

_SELECTOR_BREAKS = frozenset(".#:[")


def _parse_float(text: str) -> Optional[float]:
    """Parse a plain decimal number, returning None when it is not one."""
    if not text or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


@dataclass
class Declaration:
    """A single ``property: value`` pair."""

    property: str
    value: str
    important: bool = False

    def with_important(self) -> Declaration:
        """Return a copy of this declaration flagged ``!important``."""
        return dataclasses.replace(self, important=True)


@dataclass(frozen=True)
class UniversalSelector:
    """Matches any element (``*``)."""


@dataclass(frozen=True)
class TagSelector:
    """Matches elements by tag name (``div``)."""

    name: str


@dataclass(frozen=True)
class IdSelector:
    """Matches an element by its ``id`` attribute (``#header``)."""

    name: str


@dataclass(frozen=True)
class ClassSelector:
    """Matches elements carrying a class (``.container``)."""

    name: str


@dataclass(frozen=True)
class AttributeSelector:
    """Matches elements whose attribute equals a value (``[type='text']``)."""

    name: str
    value: str


@dataclass(frozen=True)
class PseudoClassSelector:
    """A pseudo-class such as ``hover`` or ``nth-child(2)``."""

    name: str


@dataclass(frozen=True)
class DescendantSelector:
    """Matches ``descendant`` elements that have an ``ancestor`` (``div p``)."""

    ancestor: Selector
    descendant: Selector


Selector = Union[
    UniversalSelector,
    TagSelector,
    IdSelector,
    ClassSelector,
    AttributeSelector,
    PseudoClassSelector,
    DescendantSelector,
]


def _read_part(text: str, pos: int) -> tuple[str, int]:
    end = pos
    while end < len(text) and text[end] not in _SELECTOR_BREAKS:
        end += 1
    return text[pos:end], end


def _read_attribute(text: str, pos: int) -> Optional[tuple[AttributeSelector, int]]:
    close = text.find("]", pos)
    if close < 0:
        return None
    inner = text[pos + 1:close]
    name, eq, value = inner.partition("=")
    if not eq:
        return AttributeSelector(inner, ""), close + 1
    return AttributeSelector(name, value.strip("'\"")), close + 1


def _parse_compound(text: str) -> list[Selector]:
    """Parse a compound selector such as ``div.main:first-child``."""
    text = text.strip()
    if not text or text == "*":
        return [UniversalSelector()]

    result: list[Selector] = []
    pos = 0
    first = True
    while pos < len(text):
        ch = text[pos]
        if ch == "#":
            name, pos = _read_part(text, pos + 1)
            result.append(IdSelector(name))
        elif ch == ".":
            name, pos = _read_part(text, pos + 1)
            result.append(ClassSelector(name))
        elif ch == ":":
            name, pos = _read_part(text, pos + 1)
            result.append(PseudoClassSelector(name))
        elif ch == "[":
            parsed = _read_attribute(text, pos)
            if parsed is None:
                break
            selector, pos = parsed
            result.append(selector)
        elif first:
            name, pos = _read_part(text, pos)
            result.append(TagSelector(name))
        else:
            pos += 1
        first = False
    return result


def parse_selector(text: str) -> list[Selector]:
    """Parse one selector (no commas) into its compound parts.

    Whitespace-separated selectors become a single descendant selector built
    from the first part of the first and last compounds.
    """
    text = text.strip()
    if not text:
        return []
    parts = text.split()
    if len(parts) >= 2:
        ancestor = next(iter(_parse_compound(parts[0])), UniversalSelector())
        descendant = next(iter(_parse_compound(parts[-1])), UniversalSelector())
        return [DescendantSelector(ancestor, descendant)]
    return _parse_compound(text)


def _count(selector: Selector) -> tuple[int, int, int]:
    if isinstance(selector, IdSelector):
        return 1, 0, 0
    if isinstance(selector, (ClassSelector, AttributeSelector, PseudoClassSelector)):
        return 0, 1, 0
    if isinstance(selector, TagSelector):
        return 0, 0, 1
    if isinstance(selector, DescendantSelector):
        a = _count(selector.ancestor)
        d = _count(selector.descendant)
        return a[0] + d[0], a[1] + d[1], a[2] + d[2]
    return 0, 0, 0


def calculate_specificity(selectors: Iterable[Selector]) -> int:
    """Weight selectors as ``(ids * 256 + classes) * 256 + tags``."""
    ids = classes = tags = 0
    for selector in selectors:
        i, c, t = _count(selector)
        ids += i
        classes += c
        tags += t
    return (ids * 256 + classes) * 256 + tags


@dataclass
class StyleRule:
    """Selectors joined with AND, and the declarations they apply."""

    selectors: list[Selector]
    declarations: list[Declaration]
    specificity: int = field(init=False)

    def __post_init__(self) -> None:
        self.specificity = calculate_specificity(self.selectors)


@dataclass
class Keyframe:
    """One step of an animation; ``selector`` runs from 0.0 to 1.0."""

    selector: float
    declarations: list[Declaration]


def _split_blocks(css_text: str) -> list[str]:
    blocks: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in css_text:
        current.append(ch)
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                blocks.append("".join(current))
                current = []
    return blocks


def _parse_declarations(text: str) -> list[Declaration]:
    declarations: list[Declaration] = []
    for item in text.split(";"):
        item = item.strip()
        if not item or ":" not in item:
            continue
        prop, _, value = item.partition(":")
        declaration = Declaration(prop.strip(), value.strip())
        if declaration.value.lower().endswith("!important"):
            declaration.important = True
            declaration.value = declaration.value[:-10].strip()
        declarations.append(declaration)
    return declarations


def _keyframe_offset(text: str) -> float:
    if text == "from":
        return 0.0
    if text == "to":
        return 1.0
    if text.endswith("%"):
        value = _parse_float(text[:-1].strip())
        offset = (value if value is not None else 0.0) / 100.0
    else:
        value = _parse_float(text)
        offset = value if value is not None else 0.0
    if math.isnan(offset):
        return offset
    return min(max(offset, 0.0), 1.0)


def _parse_keyframes(block: str) -> Optional[tuple[str, list[Keyframe]]]:
    block = block.strip()
    prefix = "@keyframes "
    if not block.startswith(prefix):
        return None
    rest = block[len(prefix):]
    open_brace = rest.find("{")
    close_brace = rest.rfind("}")
    if open_brace < 0 or close_brace < 0:
        return None
    name = rest[:open_brace].strip()
    if not name:
        return None
    body = rest[open_brace + 1:close_brace].strip()
    if not body:
        return name, []

    frames: list[Keyframe] = []
    current: list[str] = []
    depth = 0
    for ch in body:
        current.append(ch)
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
            if depth == 0:
                chunk = "".join(current)
                brace = chunk.find("{")
                if brace < 0:
                    return None
                offset = _keyframe_offset(chunk[:brace].strip())
                decls = _parse_declarations(chunk[brace + 1:].rstrip("}").strip())
                frames.append(Keyframe(offset, decls))
                current = []

    frames.sort(key=lambda kf: kf.selector)
    return name, frames


def _static_match(
    selector: Selector,
    tag: Optional[str],
    element_id: Optional[str],
    classes: Sequence[str],
) -> bool:
    if isinstance(selector, UniversalSelector):
        return True
    if isinstance(selector, TagSelector):
        return tag is not None and tag == selector.name
    if isinstance(selector, IdSelector):
        return element_id is not None and element_id == selector.name
    if isinstance(selector, ClassSelector):
        return selector.name in classes
    if isinstance(selector, DescendantSelector):
        return _static_match(selector.descendant, tag, element_id, classes)
    return False


@dataclass
class StyleSheet:
    """Parsed style rules plus named @keyframes animations."""

    rules: list[StyleRule] = field(default_factory=list)
    keyframes: dict[str, list[Keyframe]] = field(default_factory=dict)

    def add_rule(self, rule: StyleRule) -> None:
        self.rules.append(rule)

    @classmethod
    def parse(cls, css_text: str) -> StyleSheet:
        """Parse CSS text; malformed blocks are skipped."""
        sheet = cls()
        for block in _split_blocks(css_text):
            if block.lstrip().startswith("@keyframes"):
                parsed = _parse_keyframes(block)
                if parsed is not None:
                    name, frames = parsed
                    sheet.keyframes[name] = frames
                continue

            open_brace = block.find("{")
            close_brace = block.rfind("}")
            if open_brace < 0 or close_brace < 0:
                continue
            selectors_part = block[:open_brace].strip()
            declarations = _parse_declarations(block[open_brace + 1:close_brace].strip())
            if not declarations:
                continue
            for group in selectors_part.split(","):
                group = group.strip()
                if not group:
                    continue
                selectors = parse_selector(group)
                if selectors:
                    sheet.add_rule(StyleRule(selectors, list(declarations)))
        return sheet

    def find_matching_rules(
        self,
        tag: Optional[str],
        element_id: Optional[str],
        classes: Sequence[str],
    ) -> list[StyleRule]:
        """Rules with any selector matching the element, ignoring tree structure."""
        return [
            rule
            for rule in self.rules
            if any(_static_match(s, tag, element_id, classes) for s in rule.selectors)
        ]
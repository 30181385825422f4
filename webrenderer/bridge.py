"""Shared value types exchanged between the engine and its host."""

from __future__ import annotations

from dataclasses import dataclass
from string import hexdigits
from typing import Callable, ClassVar, Mapping, Optional

EventHandler = Callable[[float, float], None]
"""Click handler receiving the click coordinates."""

FormHandler = Callable[[Mapping[str, str]], None]
"""Form submission handler receiving field names mapped to values."""

WindowOpenHandler = Callable[[str], bool]
"""window.open handler receiving a URL and returning whether it was handled."""


def _parse_hex_byte(chunk: bytes) -> int:
    try:
        text = chunk.decode("ascii")
    except UnicodeDecodeError:
        return 0
    body = text[1:] if text.startswith("+") else text
    if not body or any(ch not in hexdigits for ch in body):
        return 0
    value = int(body, 16)
    return value if value <= 255 else 0


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    TRANSPARENT: ClassVar[Color]

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        return cls(r, g, b, a)

    @classmethod
    def from_hex(cls, hex_text: str) -> Color:
        """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa``; other lengths give opaque black.

        Digits that are not hexadecimal count as zero.
        """
        raw = hex_text.lstrip("#").encode("utf-8")
        if len(raw) == 3:
            return cls(*(_parse_hex_byte(raw[i:i + 1]) * 17 for i in range(3)), 255)
        if len(raw) == 6:
            return cls(*(_parse_hex_byte(raw[i:i + 2]) for i in (0, 2, 4)), 255)
        if len(raw) == 8:
            return cls(*(_parse_hex_byte(raw[i:i + 2]) for i in (0, 2, 4, 6)))
        return cls(0, 0, 0, 255)


Color.BLACK = Color(0, 0, 0, 255)
Color.WHITE = Color(255, 255, 255, 255)
Color.RED = Color(255, 0, 0, 255)
Color.TRANSPARENT = Color(0, 0, 0, 0)


@dataclass
class LayoutRect:
    """The box an element occupies on the page."""

    x: float
    y: float
    width: float
    height: float


@dataclass
class LayoutNode:
    """Layout details of one element."""

    dom_node: int
    tag_name: str
    x: float
    y: float
    width: float
    height: float
    background: Optional[Color] = None


@dataclass
class Declaration:
    """A CSS ``property: value`` pair."""

    property: str
    value: str
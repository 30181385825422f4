"""Keyframe animation timelines and property interpolation."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from string import hexdigits
from typing import Optional, Sequence

from .css_parser import Keyframe

_U32_MAX = 2**32 - 1
_EM_PX = 16.0


class FillMode(enum.Enum):
    """How an animation applies its values outside its active period."""

    NONE = "none"
    FORWARDS = "forwards"
    BACKWARDS = "backwards"
    BOTH = "both"


class Direction(enum.Enum):
    """The direction in which iterations play."""

    NORMAL = "normal"
    REVERSE = "reverse"
    ALTERNATE = "alternate"
    ALTERNATE_REVERSE = "alternate-reverse"


_REVERSED = (Direction.REVERSE, Direction.ALTERNATE_REVERSE)


def _iteration_index(ratio: float) -> int:
    """Truncate a non-negative cycle ratio to an unsigned 32-bit iteration index."""
    if math.isnan(ratio) or ratio <= 0:
        return 0
    if ratio >= _U32_MAX:
        return _U32_MAX
    return int(ratio)


@dataclass
class AnimState:
    """The running state of one animation on one element; times are in seconds."""

    name: str
    elapsed: float = 0.0
    duration: float = 0.3
    delay: float = 0.0
    iteration_count: float = 1.0
    fill_mode: FillMode = FillMode.NONE
    direction: Direction = Direction.NORMAL
    running: bool = True

    def advance(self, dt: float) -> None:
        """Move the timeline forward, stopping once every iteration has played."""
        if not self.running:
            return
        self.elapsed += dt
        total = self.delay + self.duration * self.iteration_count
        if self.elapsed >= total and self.iteration_count > 0.0:
            self.running = False
            self.elapsed = total

    def progress(self) -> float:
        """Current progress from 0.0 to 1.0, taking delay, fill mode and direction into account."""
        if not self.running and self.elapsed >= self.delay + self.duration:
            if self.fill_mode in (FillMode.FORWARDS, FillMode.BOTH):
                return 0.0 if self.direction in _REVERSED else 1.0
            return 0.0

        if self.elapsed < self.delay:
            if self.fill_mode in (FillMode.BACKWARDS, FillMode.BOTH):
                return 1.0 if self.direction in _REVERSED else 0.0
            return 0.0

        cycle_time = self.elapsed - self.delay
        if self.duration == 0:
            ratio = math.nan if cycle_time == 0 else math.copysign(math.inf, cycle_time)
            t = math.nan
        else:
            ratio = cycle_time / self.duration
            t = math.fmod(cycle_time, self.duration) / self.duration
        iteration = _iteration_index(ratio)
        even = iteration % 2 == 0

        if self.direction in (Direction.NORMAL, Direction.REVERSE) and even:
            return 1.0 - t if self.direction is Direction.REVERSE else t
        if self.direction is Direction.ALTERNATE:
            return t if even else 1.0 - t
        if self.direction is Direction.ALTERNATE_REVERSE:
            return 1.0 - t if even else t
        return t

    def reset(self) -> None:
        """Rewind to the start and resume running."""
        self.elapsed = 0.0
        self.running = True


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _parse_number(text: str) -> Optional[float]:
    if not text or "_" in text or text != text.strip():
        return None
    body = text[1:] if text[0] in "+-" else text
    if body.lower() in ("infinity",) or (body and body[0] in hexdigits and body.lower().startswith("0x")):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _extract_numeric(value: str) -> Optional[float]:
    v = value.strip()
    if v.endswith("px"):
        return _parse_number(v[:-2].strip())
    if v.endswith("em"):
        number = _parse_number(v[:-2].strip())
        return None if number is None else number * _EM_PX
    if v.endswith("%"):
        return _parse_number(v[:-1].strip())
    return _parse_number(v)


def _format_number(value: float) -> str:
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


def _format_numeric(value: float, original: str) -> str:
    if original.endswith("%"):
        return f"{_format_number(value)}%"
    if original.endswith("em"):
        return f"{_format_number(value / _EM_PX)}em"
    return f"{_format_number(value)}px"


def interpolate_keyframes(
    keyframes: Sequence[Keyframe], prop: str, progress: float
) -> Optional[str]:
    """Value of ``prop`` at ``progress`` between the keyframes that define it.

    Numeric values are interpolated linearly; other values snap to the nearer
    keyframe. Returns None when no keyframe sets the property.
    """
    values = [
        (kf.selector, decl.value)
        for kf in keyframes
        for decl in kf.declarations
        if decl.property == prop
    ]
    if not values:
        return None

    if progress <= values[0][0]:
        return values[0][1]
    if progress >= values[-1][0]:
        return values[-1][1]

    for (t0, v0), (t1, v1) in zip(values, values[1:]):
        if t0 <= progress <= t1:
            local_t = 0.5 if abs(t1 - t0) < 0.0001 else (progress - t0) / (t1 - t0)
            n0 = _extract_numeric(v0)
            n1 = _extract_numeric(v1)
            if n0 is not None and n1 is not None:
                return _format_numeric(_lerp(n0, n1, local_t), v0)
            return v0 if local_t < 0.5 else v1

    return None
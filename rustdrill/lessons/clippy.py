"""Lessons on the kind of code a linter complains about."""

from __future__ import annotations

import math
import struct


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def circle_area_message(radius: float = 5.0) -> str:
    """Print and return the area of a circle, computed in single precision."""
    pi = _f32(math.pi)
    r = _f32(radius)
    area = _f32(pi * _f32(r * r))
    message = f"The area of a circle with radius {r:.2f} is {area:.5f}!"
    print(message)
    return message


def add_optional(res: int = 42, option: int | None = 12) -> int:
    """Add the optional value to res when it is present; print and return the sum."""
    if option is not None:
        res += option
    print(res)
    return res
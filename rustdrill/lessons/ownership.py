"""Lessons on handing values around and on optional values."""

from __future__ import annotations

from collections.abc import Sequence

from .enums import Point


def fill_vec(values: Sequence[int]) -> list[int]:
    """A new list with 22, 44 and 66 appended; the input is left unchanged."""
    return [*values, 22, 44, 66]


def new_filled_vec() -> list[int]:
    """A freshly made list holding 22, 44 and 66."""
    return fill_vec([])


def describe_vec(label: str, values: Sequence[int]) -> str:
    """Print and return the list's label, length and contents."""
    line = f"{label} has length {len(values)} content `{list(values)}`"
    print(line)
    return line


def add_twice(x: int = 100) -> int:
    """Add 100 and then 1000 to x, one change after the other."""
    x += 100
    x += 1000
    return x


def print_number(maybe_number: int | None) -> str:
    """Print and return the number; raise ValueError when there is none."""
    if maybe_number is None:
        raise ValueError("called print_number without a number")
    line = f"printing: {maybe_number}"
    print(line)
    return line


def computed_numbers() -> list[int]:
    """Five numbers computed from their positions."""
    return [((i * 1235) + 2) // (4 * 16) for i in range(5)]


def pop_integers(values: list[int | None]) -> list[int]:
    """Pop from the end while the popped entry is a number; return those numbers."""
    popped = []
    while values:
        integer = values.pop()
        if integer is None:
            break
        print(f"current value: {integer}")
        popped.append(integer)
    return popped


def describe_point(point: Point | None) -> str:
    """Print and return the point's coordinates, or "no match" when absent."""
    if point is None:
        line = "no match"
    else:
        line = f"Co-ordinates are {point.x},{point.y} "
    print(line)
    return line
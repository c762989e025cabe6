"""Lessons on recursive data: the cons list."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Cons:
    """One cell of a cons list; ``rest`` is the next cell, or None at the end."""

    value: int
    rest: Cons | None = None

    def __iter__(self) -> Iterator[int]:
        cell: Cons | None = self
        while cell is not None:
            yield cell.value
            cell = cell.rest


def create_empty_list() -> Cons | None:
    """The empty list."""
    return None


def create_non_empty_list() -> Cons:
    """A list holding a single element."""
    return Cons(2, None)
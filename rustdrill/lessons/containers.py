"""Lessons on lists and dictionaries."""

from __future__ import annotations

import enum
from collections.abc import Iterable, MutableMapping


class Fruit(enum.Enum):
    """Kinds of fruit that can go in a basket."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fruit_basket() -> dict[str, int]:
    """A basket holding at least three kinds and at least five fruits."""
    basket = {"banana": 2, "apple": 3, "mango": 6}
    basket.setdefault("apple", 1)
    return basket


def fill_fruit_basket(basket: MutableMapping[Fruit, int]) -> None:
    """Add five of every kind of fruit not yet in the basket, leaving the others alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, 5)


def array_and_vec() -> tuple[tuple[int, ...], list[int]]:
    """A fixed array and a growable list holding the same elements."""
    array = (10, 20, 30, 40)
    return array, list(array)


def vec_loop(values: Iterable[int]) -> list[int]:
    """Each value multiplied by two."""
    return [value * 2 for value in values]
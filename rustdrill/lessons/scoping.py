"""Lessons on reusable snippets, private helpers, re-exported names and imports."""

from __future__ import annotations

import time

_FRUIT_PEAR = "Pear"
_FRUIT_APPLE = "Apple"
_VEGGIE_CUCUMBER = "Cucumber"
_VEGGIE_CARROT = "Carrot"

fruit = _FRUIT_PEAR
veggie = _VEGGIE_CUCUMBER


def my_macro(*args: object) -> str:
    """Print a fixed line, or a line showing the one value given."""
    if not args:
        line = "Check out my macro!"
    elif len(args) == 1:
        line = f"Look at this other macro: {args[0]}"
    else:
        raise TypeError(f"my_macro takes at most one value, got {len(args)}")
    print(line)
    return line


def _get_secret_recipe() -> str:
    return "Ginger"


def make_sausage() -> str:
    """Print and return a sausage made from the secret recipe."""
    line = f"sausage! {_get_secret_recipe()}"
    print(line)
    return line


def favorite_snacks() -> str:
    """Print and return the favourite fruit and vegetable."""
    line = f"favorite snacks: {fruit} and {veggie}"
    print(line)
    return line


def seconds_since_epoch() -> int:
    """Print and return the whole seconds elapsed since the Unix epoch."""
    elapsed = time.time()
    if elapsed < 0:
        raise RuntimeError("SystemTime before UNIX EPOCH!")
    seconds = int(elapsed)
    print(f"1970-01-01 00:00:00 UTC was {seconds} seconds ago!")
    return seconds
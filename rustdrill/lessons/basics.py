"""Lessons on functions, primitive types and the first steps."""

from __future__ import annotations

from collections.abc import Sequence


def _emit(*lines: str) -> list[str]:
    for line in lines:
        print(line)
    return list(lines)


def call_me(num: int | None = None) -> list[str]:
    """Ring once per call number; with no number, announce the call."""
    if num is None:
        return _emit("Calling call_me")
    return _emit(*(f"Ring! Call number {i + 1}" for i in range(num)))


def is_even(num: int) -> bool:
    return num % 2 == 0


def sale_price(price: int) -> int:
    """Ten off an even price, three off an odd one."""
    return price - 10 if is_even(price) else price - 3


def square(num: int) -> int:
    return num * num


def intro_lines() -> list[str]:
    """Print and return the welcome text."""
    return _emit(
        "Hello and",
        "       welcome to...",
        "         rustdrill",
        "",
        "This exercise compiles successfully. The remaining exercises contain a compiler",
        "or logic error. The central concept here is to fix these errors and",
        "solve the exercises. Good luck!",
    )


def greet(world: str = "world") -> str:
    """Print and return a greeting."""
    return _emit(f"Hello {world}!")[0]


def greeting_lines(is_morning: bool = True, is_evening: bool = False) -> list[str]:
    """Greet for each time of day that applies."""
    lines = []
    if is_morning:
        lines.append("Good morning!")
    if is_evening:
        lines.append("Good evening!")
    return _emit(*lines)


def describe_character(ch: str) -> str:
    """Say whether a single character is alphabetic, numeric or neither."""
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    if ch.isalpha():
        message = "Alphabetical!"
    elif ch.isnumeric():
        message = "Numerical!"
    else:
        message = "Neither alphabetic nor numeric!"
    return _emit(message)[0]


def array_size_message(values: Sequence[object]) -> str:
    """Comment on whether the array holds at least 100 elements."""
    if len(values) >= 100:
        message = "Wow, that's a big array!"
    else:
        message = "Meh, I eat arrays like that for breakfast."
    return _emit(message)[0]


def nice_slice(values: Sequence[int]) -> Sequence[int]:
    """The elements from index 1 up to, not including, index 4."""
    return values[1:4]


def _display(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe_cat(cat: tuple[str, float]) -> str:
    """Print and return the cat's name and age."""
    name, age = cat
    return _emit(f"{name} is {_display(age)} years old.")[0]


def second_of(numbers: Sequence[int]) -> int:
    """The second element of the tuple."""
    return numbers[1]
"""Quizzes on functions, strings, tests and macros."""

from __future__ import annotations


def calculate_apple_price(apple_num: int) -> int:
    """Two per apple, or one per apple when buying more than 40."""
    if apple_num <= 40:
        return apple_num * 2
    return apple_num


def string_slice(arg: str) -> str:
    """Print a borrowed string and hand it back."""
    print(arg)
    return arg


def string(arg: str) -> str:
    """Print an owned string and hand it back."""
    print(arg)
    return arg


def quiz2_lines() -> list[str]:
    """Print each of the quiz values through the matching function."""
    return [
        string_slice("blue"),
        string("red"),
        string("hi"),
        string("rust is fun!"),
        string_slice("nice weather"),
        string("Interpolation {}".format("Station")),
        string_slice("abc"[0:1]),
        string_slice("  hello there ".strip()),
        string("Happy Monday!".replace("Mon", "Tues")),
        string("mY sHiFt KeY iS sTiCkY".lower()),
    ]


def times_two(num: int) -> int:
    return num * 2


def my_macro(val: str) -> str:
    return "Hello " + val
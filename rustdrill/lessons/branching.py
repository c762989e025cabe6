"""Lessons on choosing between values."""

from __future__ import annotations


def bigger(a: int, b: int) -> int:
    """The larger of the two numbers."""
    return a if a > b else b


def fizz_if_foo(fizzish: str) -> str:
    """"foo" for "fizz", "bar" for "fuzz", "baz" for anything else."""
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"
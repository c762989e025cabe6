"""Lessons on iterators: stepping, mapping, collecting, folding and counting."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence

_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_FRUITS = ("banana", "custard apple", "avocado", "peach", "raspberry")
_NUMBERS = (27, 297, 38502, 81)
_DIVISOR = 27


def favorite_fruits() -> Iterator[str]:
    """An iterator over a fixed list of favourite fruits."""
    return iter(_FRUITS)


def capitalize_first(text: str) -> str:
    """Upper-case the first character of the text: "hello" -> "Hello"."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def capitalize_words_vector(words: Iterable[str]) -> list[str]:
    """Capitalize each word: ["hello", "world"] -> ["Hello", "World"]."""
    return [capitalize_first(word) for word in words]


def capitalize_words_string(words: Iterable[str]) -> str:
    """Capitalize each word and join them: ["hello", " ", "world"] -> "Hello World"."""
    return "".join(capitalize_first(word) for word in words)


class DivideByZeroError(ZeroDivisionError):
    """Raised when the divisor is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DivideByZeroError):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(DivideByZeroError)


class NotDivisibleError(ValueError):
    """Raised when the dividend is not evenly divisible by the divisor."""

    def __init__(self, dividend: int, divisor: int) -> None:
        super().__init__(f"{dividend} is not divisible by {divisor}")
        self.dividend = dividend
        self.divisor = divisor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotDivisibleError):
            return NotImplemented
        return (self.dividend, self.divisor) == (other.dividend, other.divisor)

    def __hash__(self) -> int:
        return hash((self.dividend, self.divisor))


def divide(a: int, b: int) -> int:
    """Divide a by b when it divides evenly; raise otherwise."""
    if b == 0:
        raise DivideByZeroError()
    if a == _I32_MIN and b == -1:
        raise OverflowError("attempt to divide with overflow")
    if a % b != 0:
        raise NotDivisibleError(a, b)
    return a // b


def result_with_list() -> list[int]:
    """Divide each number by 27, raising at the first one that fails."""
    return [divide(number, _DIVISOR) for number in _NUMBERS]


def list_of_results() -> list[int | ArithmeticError | ValueError]:
    """Divide each number by 27, keeping each quotient or error in place."""

    def attempt(number: int) -> int | ArithmeticError | ValueError:
        try:
            return divide(number, _DIVISOR)
        except (DivideByZeroError, NotDivisibleError) as err:
            return err

    return [attempt(number) for number in _NUMBERS]


def factorial(num: int) -> int:
    """The product 1 * 2 * ... * num, which must fit in an unsigned 64-bit value."""
    if num < 0:
        raise ValueError("factorial of a negative number")
    result = math.prod(range(1, num + 1))
    if result > _U64_MAX:
        raise OverflowError("attempt to multiply with overflow")
    return result


class Progress(enum.Enum):
    """How far an exercise has been worked through."""

    NONE = "none"
    SOME = "some"
    COMPLETE = "complete"


def count_for(mapping: Mapping[str, Progress], value: Progress) -> int:
    """Count entries with the given progress using an explicit loop."""
    count = 0
    for progress in mapping.values():
        if progress is value:
            count += 1
    return count


def count_iterator(mapping: Mapping[str, Progress], value: Progress) -> int:
    """Count entries with the given progress."""
    return sum(1 for progress in mapping.values() if progress is value)


def count_collection_for(collection: Sequence[Mapping[str, Progress]], value: Progress) -> int:
    """Count entries with the given progress across maps, using explicit loops."""
    count = 0
    for mapping in collection:
        for progress in mapping.values():
            if progress is value:
                count += 1
    return count


def count_collection_iterator(
    collection: Sequence[Mapping[str, Progress]], value: Progress
) -> int:
    """Count entries with the given progress across maps."""
    return sum(count_iterator(mapping, value) for mapping in collection)
"""Lessons on reporting errors: messages, parse failures and custom error types."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_PROCESSING_FEE = 1
_COST_PER_ITEM = 5
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _parse_int(text: str, bits: int, signed: bool = True) -> int:
    """Parse a fixed-width integer strictly: an optional sign and ASCII digits only."""
    invalid = "invalid digit found in string"
    if not text:
        raise ValueError("cannot parse integer from empty string")
    digits = text
    negative = False
    if text[0] in "+-":
        if len(text) == 1:
            raise ValueError(invalid)
        if text[0] == "+":
            digits = text[1:]
        elif signed:
            negative = True
            digits = text[1:]
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(invalid)
    value = -int(digits) if negative else int(digits)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; raise ValueError when the name is empty."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Tokens needed for the typed quantity: five per item plus a fee of one."""
    quantity = _parse_int(item_quantity, 32)
    cost = quantity * _COST_PER_ITEM + _PROCESSING_FEE
    if not _I32_MIN <= cost <= _I32_MAX:
        raise OverflowError("attempt to compute the cost with overflow")
    return cost


def spend_tokens(tokens: int = 100, user_input: str = "8") -> int:
    """Buy the typed quantity if affordable; print the outcome and return the tokens left."""
    cost = total_cost(user_input)
    if cost > tokens:
        print("You can't afford that many!")
        return tokens
    tokens -= cost
    print(f"You now have {tokens} tokens.")
    return tokens


class CreationErrorKind(enum.Enum):
    """Why a positive nonzero integer could not be created."""

    NEGATIVE = "number is negative"
    ZERO = "number is zero"


class CreationError(ValueError):
    """Raised when a value is not a positive nonzero integer."""

    def __init__(self, kind: CreationErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CreationError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value == 0:
            raise CreationError(CreationErrorKind.ZERO)
        if self.value < 0:
            raise CreationError(CreationErrorKind.NEGATIVE)


class ParsePosNonzeroError(ValueError):
    """Raised when text is not a number or not a positive nonzero one.

    ``source`` holds the underlying error: a CreationError, or the ValueError
    raised while parsing the number.
    """

    def __init__(self, source: ValueError) -> None:
        super().__init__(str(source))
        self.source = source

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsePosNonzeroError):
            return NotImplemented
        return (type(self.source), str(self.source)) == (type(other.source), str(other.source))

    def __hash__(self) -> int:
        return hash((type(self.source), str(self.source)))


def parse_pos_nonzero(s: str) -> PositiveNonzeroInteger:
    """Parse text into a positive nonzero integer; raise ParsePosNonzeroError otherwise."""
    try:
        value = _parse_int(s, 64)
    except ValueError as err:
        raise ParsePosNonzeroError(err) from err
    try:
        return PositiveNonzeroInteger(value)
    except CreationError as err:
        raise ParsePosNonzeroError(err) from err
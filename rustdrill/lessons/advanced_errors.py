"""Lessons on error types that wrap other errors and describe themselves."""

from __future__ import annotations

import enum
import math
import re
import struct
from dataclasses import dataclass

from .errors import CreationError, ParsePosNonzeroError, PositiveNonzeroInteger, _parse_int

_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def _f32(value: float) -> float:
    """Round a value to single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_f32(text: str) -> float:
    """Parse a single-precision float strictly: no whitespace or underscores."""
    if not text:
        raise ValueError("cannot parse float from empty string")
    if not _FLOAT.fullmatch(text):
        raise ValueError("invalid float literal")
    return _f32(float(text))


def parse_positive_nonzero(s: str) -> PositiveNonzeroInteger:
    """Parse text into a positive nonzero integer; raise ParsePosNonzeroError otherwise."""
    try:
        return PositiveNonzeroInteger(_parse_int(s, 64))
    except (CreationError, ValueError) as err:
        raise ParsePosNonzeroError(err) from err


class ClimateErrorKind(enum.Enum):
    """Why a climate record could not be parsed."""

    EMPTY = "empty"
    BAD_LEN = "bad_len"
    NO_CITY = "no_city"
    PARSE_INT = "parse_int"
    PARSE_FLOAT = "parse_float"


class ParseClimateError(ValueError):
    """Raised when "city,year,temperature" text cannot be parsed."""

    def __init__(self, kind: ClimateErrorKind, source: ValueError | None = None) -> None:
        self.kind = kind
        self.source = source
        super().__init__(self._describe())

    def _describe(self) -> str:
        match self.kind:
            case ClimateErrorKind.EMPTY:
                return "empty input"
            case ClimateErrorKind.BAD_LEN:
                return "incorrect number of fields"
            case ClimateErrorKind.NO_CITY:
                return "no city name"
            case ClimateErrorKind.PARSE_INT:
                return f"error parsing year: {self.source}"
            case _:
                return f"error parsing temperature: {self.source}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseClimateError):
            return NotImplemented
        return (self.kind, str(self.source)) == (other.kind, str(other.source))

    def __hash__(self) -> int:
        return hash((self.kind, str(self.source)))


@dataclass(frozen=True)
class Climate:
    """A city's temperature in a given year; the temperature is kept in single precision."""

    city: str
    year: int
    temp: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "temp", _f32(self.temp))


def parse_climate(s: str) -> Climate:
    """Parse "city,year,temperature"; raise ParseClimateError on bad input."""
    if not s:
        raise ParseClimateError(ClimateErrorKind.EMPTY)
    fields = s.split(",")
    if len(fields) != 3:
        raise ParseClimateError(ClimateErrorKind.BAD_LEN)
    city, year_text, temp_text = fields
    if not city:
        raise ParseClimateError(ClimateErrorKind.NO_CITY)
    try:
        year = _parse_int(year_text, 32, signed=False)
    except ValueError as err:
        raise ParseClimateError(ClimateErrorKind.PARSE_INT, err) from err
    try:
        temp = _parse_f32(temp_text)
    except ValueError as err:
        raise ParseClimateError(ClimateErrorKind.PARSE_FLOAT, err) from err
    return Climate(city=city, year=year, temp=temp)
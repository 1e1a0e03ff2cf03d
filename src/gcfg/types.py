"""Parsing of configuration values into Python types."""

import datetime
import enum
import re
from typing import ClassVar, Self

BOOLS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}

RE_DURATION = re.compile(
    r"""
    # A decimal number, possibly with a fraction...
    (?P<number>\d+(?:\.\d*)?|\.\d+)

    # followed by a unit.
    (?P<unit>ns|us|µs|μs|ms|s|m|h)
    """,
    re.VERBOSE,
)

# Microseconds per duration unit.
UNITS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ms": 1000,
    "s": 1000_000,
    "m": 60 * 1000_000,
    "h": 60 * 60 * 1000_000,
}


def parse_bool(text: str) -> bool:
    """Parse a boolean.

    true/yes/on/1 and false/no/off/0 are accepted in any case.

    Args:
        text: The text to parse.

    Returns:
        The boolean.

    Raises:
        ValueError: The text is not a boolean.
    """

    try:
        return BOOLS[text.strip().lower()]
    except KeyError:
        raise ValueError(f"failed to parse bool {text!r}") from None


class IntMode(enum.Flag):
    """The bases allowed when parsing an integer.

    With more than one base, the base is chosen by prefix:
    `0x` for hexadecimal and a leading `0` for octal.
    """

    DEC = enum.auto()
    HEX = enum.auto()
    OCT = enum.auto()

    @classmethod
    def parse(cls, letters: str) -> Self:
        """Parse a mode from letters, i.e. 'dh' for decimal and hexadecimal.

        Args:
            letters: Any of 'd', 'h' and 'o', in any case.

        Returns:
            The mode.

        Raises:
            ValueError: No base was given.
        """

        mode = cls(0)
        for letter, base in (("d", cls.DEC), ("h", cls.HEX), ("o", cls.OCT)):
            if letter in letters.lower():
                mode |= base

        if not mode:
            raise ValueError(f"invalid int mode {letters!r}")

        return mode


DEFAULT_INT_MODE = IntMode.DEC | IntMode.HEX


def _has_prefix(text: str, prefix: str) -> bool:
    return text.lower().startswith((prefix, "-" + prefix, "+" + prefix))


def parse_int(text: str, mode: IntMode = DEFAULT_INT_MODE) -> int:
    """Parse an integer.

    Args:
        text: The text to parse. Surrounding whitespace is ignored.
        mode: The bases to allow.

    Returns:
        The integer.

    Raises:
        ValueError: The text is not an integer in any of the allowed bases.
    """

    text = text.strip()
    hex_prefix = _has_prefix(text, "0x")
    oct_prefix = _has_prefix(text, "0") and not hex_prefix

    if IntMode.HEX in mode and (hex_prefix or mode == IntMode.HEX):
        base = 16
    elif IntMode.OCT in mode and (oct_prefix or mode == IntMode.OCT):
        base = 8
    elif IntMode.DEC in mode:
        base = 10
    else:
        raise ValueError(f"value {text!r} has neither 0x nor 0 prefix")

    # Underscores are accepted by int() but not in configuration.
    if "_" in text:
        raise ValueError(f"failed to parse int {text!r}")

    try:
        return int(text, base)
    except ValueError:
        raise ValueError(f"failed to parse int {text!r}") from None


class FixedInt(int):
    """An integer with a fixed width.

    Subclasses set the width and signedness, and values outside their range are rejected.

    Attributes:
        bits: The width in bits.
        signed: Whether or not negative values are allowed.
    """

    bits: ClassVar[int]
    signed: ClassVar[bool]

    def __new__(cls, value: int = 0) -> Self:
        low, high = cls.bounds()
        if not low <= int(value) <= high:
            raise ValueError(f"value {value} out of range for {cls.__name__}")

        return super().__new__(cls, value)

    @classmethod
    def bounds(cls) -> tuple[int, int]:
        """The smallest and largest allowed values."""

        if cls.signed:
            return -(2 ** (cls.bits - 1)), 2 ** (cls.bits - 1) - 1

        return 0, 2**cls.bits - 1


class Int8(FixedInt):
    bits = 8
    signed = True


class Int16(FixedInt):
    bits = 16
    signed = True


class Int32(FixedInt):
    bits = 32
    signed = True


class Int64(FixedInt):
    bits = 64
    signed = True


class Uint8(FixedInt):
    bits = 8
    signed = False


class Uint16(FixedInt):
    bits = 16
    signed = False


class Uint32(FixedInt):
    bits = 32
    signed = False


class Uint64(FixedInt):
    bits = 64
    signed = False


def parse_duration(text: str) -> datetime.timedelta:
    """Parse a duration such as '300ms', '1h30m' or '-1.5h'.

    Valid units are 'ns', 'us' (or 'µs'), 'ms', 's', 'm' and 'h'.
    A plain '0' is also accepted.

    Args:
        text: The text to parse.

    Returns:
        The duration. It is rounded to microseconds.

    Raises:
        ValueError: The text is not a duration.
    """

    s = text.strip()

    sign = 1
    if s and s[0] in "+-":
        if s[0] == "-":
            sign = -1
        s = s[1:]

    if s == "0":
        return datetime.timedelta()

    if not s:
        raise ValueError(f"invalid duration {text!r}")

    micros = 0.0
    pos = 0

    while pos < len(s):
        if not (m := RE_DURATION.match(s, pos)):
            raise ValueError(f"invalid duration {text!r}")

        micros += float(m["number"]) * UNITS[m["unit"]]
        pos = m.end()

    try:
        return datetime.timedelta(microseconds=sign * micros)
    except OverflowError:
        raise ValueError(f"invalid duration {text!r}: out of range") from None

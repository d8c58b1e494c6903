"""
Base Converter — digit strings between binary, hexadecimal and decimal.

Every function here is total: input that is not a valid digit string
for the declared base, or that does not fit in 64 bits, yields None
and the caller keeps the original text.
"""

import re
from typing import Optional

from tdr.ir.enums import Base

# Unsigned subjects must fit in 64 bits
MAX_UNSIGNED = (1 << 64) - 1

# Explicit literals are signed 64-bit values
MIN_SIGNED = -(1 << 63)
MAX_SIGNED = (1 << 63) - 1

_DIGITS = {
    Base.BIN: re.compile(r"[01]+"),
    Base.HEX: re.compile(r"[0-9A-Fa-f]+"),
}

# Most significant digits a 64-bit value can have
_MAX_DIGITS = {
    Base.BIN: 64,
    Base.HEX: 16,
}


def parse_digits(digits: str, base: Base) -> Optional[int]:
    """
    Parse an unsigned digit string in ``base``.

    ``int()`` alone is too lenient (it accepts signs, underscores and
    ``0x`` prefixes), so the string is checked against the digit
    alphabet first.
    """
    if not _DIGITS[base].fullmatch(digits):
        return None
    if len(digits.lstrip("0")) > _MAX_DIGITS[base]:
        return None
    value = int(digits, base.radix)
    if value > MAX_UNSIGNED:
        return None
    return value


def render(value: int, base: Base) -> str:
    """Render a non-negative value: binary digits or uppercase hex, no prefix."""
    if base is Base.BIN:
        return format(value, "b")
    return format(value, "X")


def render_signed(literal: int, base: Base) -> Optional[str]:
    """
    Render a signed literal for ``(bin, N)`` / ``(hex, N)``.

    Negative values are rendered as their 64-bit two's complement
    bit pattern. Values outside the signed 64-bit range yield None.
    """
    if literal < MIN_SIGNED or literal > MAX_SIGNED:
        return None
    return render(literal & MAX_UNSIGNED, base)


def to_decimal(digits: str, base: Base) -> Optional[str]:
    """Parse ``digits`` in ``base`` and render the value in decimal."""
    value = parse_digits(digits, base)
    if value is None:
        return None
    return str(value)


def convert(digits: str, from_base: Base, to_base: Base) -> Optional[str]:
    """Parse ``digits`` in ``from_base`` and render the value in ``to_base``."""
    value = parse_digits(digits, from_base)
    if value is None:
        return None
    return render(value, to_base)

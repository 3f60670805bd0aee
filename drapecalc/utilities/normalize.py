"""
Normalisation of user-entered measurement strings into numeric centimeters.

Every parser here returns ``None`` for input it cannot accept (empty,
non-numeric, non-finite, negative) instead of raising. ``None`` means
"invalid / not entered yet" and must never be read as zero by callers.

Accepted length forms::

    150        150cm      150 cm     1.5m       1500mm
    59in       59"        5ft        5'         2yd        1,5m
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from .conversion import CM_PER_FOOT, CM_PER_INCH, CM_PER_M, CM_PER_YARD, MM_PER_CM


class LengthUnit(str, Enum):
    """Length units accepted on input, valued by their canonical suffix."""

    MM = "mm"
    CM = "cm"
    M = "m"
    INCH = "in"
    FOOT = "ft"
    YARD = "yd"

    @property
    def cm_factor(self) -> float:
        """Number of centimeters in one of this unit."""
        return _CM_FACTORS[self]


_CM_FACTORS: dict[LengthUnit, float] = {
    LengthUnit.MM: 1.0 / MM_PER_CM,
    LengthUnit.CM: 1.0,
    LengthUnit.M: CM_PER_M,
    LengthUnit.INCH: CM_PER_INCH,
    LengthUnit.FOOT: CM_PER_FOOT,
    LengthUnit.YARD: CM_PER_YARD,
}

_UNIT_ALIASES: dict[str, LengthUnit] = {
    "mm": LengthUnit.MM,
    "cm": LengthUnit.CM,
    "m": LengthUnit.M,
    "in": LengthUnit.INCH,
    "inch": LengthUnit.INCH,
    "inches": LengthUnit.INCH,
    '"': LengthUnit.INCH,
    "ft": LengthUnit.FOOT,
    "foot": LengthUnit.FOOT,
    "feet": LengthUnit.FOOT,
    "'": LengthUnit.FOOT,
    "yd": LengthUnit.YARD,
    "yard": LengthUnit.YARD,
    "yards": LengthUnit.YARD,
}

_NUMBER_WITH_UNIT = re.compile(
    r"""^\s*
    (?P<number>[+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+))
    \s*
    (?P<unit>[a-zA-Z]+|"|')?
    \s*$""",
    re.VERBOSE,
)


def _to_float(text: str) -> float | None:
    # A lone comma is a decimal separator ("1,5"); anything else is rejected by the regex.
    if "," in text and "." not in text:
        text = text.replace(",", ".")
    try:
        return float(text)
    except ValueError:
        return None


def _is_plain_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def resolve_unit(unit: str | LengthUnit) -> LengthUnit | None:
    """Return the LengthUnit for *unit* (alias or enum), or None if unknown."""
    if isinstance(unit, LengthUnit):
        return unit
    return _UNIT_ALIASES.get(unit.strip().lower())


def parse_length(raw: Any, default_unit: str | LengthUnit = LengthUnit.CM) -> float | None:
    """
    Parse a raw length into centimeters.

    Args:
        raw: A number, or a string with an optional unit suffix.
        default_unit: Unit applied when *raw* carries no suffix.

    Returns:
        The length in centimeters, or None if *raw* is empty, non-numeric,
        non-finite, negative, or carries an unknown unit.
    """
    base = resolve_unit(default_unit)
    if base is None:
        return None

    if _is_plain_number(raw):
        value = float(raw)
        unit = base
    elif isinstance(raw, str):
        match = _NUMBER_WITH_UNIT.match(raw)
        if match is None:
            return None
        parsed = _to_float(match.group("number"))
        if parsed is None:
            return None
        value = parsed
        suffix = match.group("unit")
        if suffix is None:
            unit = base
        else:
            resolved = resolve_unit(suffix)
            if resolved is None:
                return None
            unit = resolved
    else:
        return None

    if not math.isfinite(value) or value < 0:
        return None
    return value * unit.cm_factor


def parse_quantity(raw: Any) -> int | None:
    """Parse a panel/window quantity. Only whole numbers >= 1 are accepted."""
    if _is_plain_number(raw):
        value = float(raw)
    elif isinstance(raw, str):
        parsed = _to_float(raw.strip())
        if parsed is None:
            return None
        value = parsed
    else:
        return None

    if not math.isfinite(value) or value < 1 or value != int(value):
        return None
    return int(value)


def parse_ratio(raw: Any) -> float | None:
    """
    Parse a dimensionless ratio such as a fullness multiplier.

    ``"2.5"`` and ``"250%"`` both give 2.5. Zero is accepted; negatives are not.
    """
    if _is_plain_number(raw):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        percent = text.endswith("%")
        if percent:
            text = text[:-1].strip()
        parsed = _to_float(text)
        if parsed is None:
            return None
        value = parsed / 100.0 if percent else parsed
    else:
        return None

    if not math.isfinite(value) or value < 0:
        return None
    return value

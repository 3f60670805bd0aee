"""
Shared utilities for the drapecalc fabric estimator.

Provides deterministic tools used by every calculation stage: unit
conversion, and normalisation of raw user input into centimeters.
"""

from .conversion import (
    CM_PER_INCH,
    CM_PER_M,
    M_PER_YARD,
    cm_to_m,
    cm_to_mm,
    inches_to_cm,
    m_to_cm,
    mm_to_cm,
    sqcm_to_sqm,
    sqyard_price_to_sqm_price,
    yard_price_to_meter_price,
)
from .normalize import LengthUnit, parse_length, parse_quantity, parse_ratio, resolve_unit

__all__ = [
    # types
    "LengthUnit",
    # conversion
    "CM_PER_INCH",
    "CM_PER_M",
    "M_PER_YARD",
    "cm_to_m",
    "cm_to_mm",
    "inches_to_cm",
    "m_to_cm",
    "mm_to_cm",
    "sqcm_to_sqm",
    "sqyard_price_to_sqm_price",
    "yard_price_to_meter_price",
    # normalisation
    "parse_length",
    "parse_quantity",
    "parse_ratio",
    "resolve_unit",
]

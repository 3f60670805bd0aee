"""
Unit conversion between physical lengths, areas and unit prices.

All physical lengths are in centimeters unless otherwise noted.
All functions are pure — no side effects, no state.
"""

from __future__ import annotations

CM_PER_M: float = 100.0
MM_PER_CM: float = 10.0
CM_PER_INCH: float = 2.54
CM_PER_FOOT: float = 30.48
M_PER_YARD: float = 0.9144
CM_PER_YARD: float = M_PER_YARD * CM_PER_M
SQCM_PER_SQM: float = CM_PER_M * CM_PER_M
SQM_PER_SQYARD: float = M_PER_YARD * M_PER_YARD


def mm_to_cm(mm: float) -> float:
    """Convert millimeters to centimeters."""
    return mm / MM_PER_CM


def cm_to_mm(cm: float) -> float:
    """Convert centimeters to millimeters."""
    return cm * MM_PER_CM


def cm_to_m(cm: float) -> float:
    """Convert centimeters to meters."""
    return cm / CM_PER_M


def m_to_cm(m: float) -> float:
    """Convert meters to centimeters."""
    return m * CM_PER_M


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches * CM_PER_INCH


def sqcm_to_sqm(sqcm: float) -> float:
    """Convert square centimeters to square meters."""
    return sqcm / SQCM_PER_SQM


def yard_price_to_meter_price(price_per_yard: float) -> float:
    """Convert a price per linear yard into the equivalent price per linear meter.

    A yard is shorter than a meter, so the meter price is the larger figure:
    20.00/yd becomes 20 / 0.9144 ≈ 21.87/m.
    """
    return price_per_yard / M_PER_YARD


def sqyard_price_to_sqm_price(price_per_sqyard: float) -> float:
    """Convert a price per square yard into the equivalent price per square meter."""
    return price_per_sqyard / SQM_PER_SQYARD

"""
Selected option schema: priced add-ons chosen alongside the fabric
(motorisation, tie-backs, heading tape, ...).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class OptionPricingMethod(str, Enum):
    """
    How an option's price scales with the treatment.

      FIXED      → price once per treatment
      PER_METER  → price × rail width in meters
      PER_SQM    → price × rail width × drop in m²
      PER_DROP   → price × drop in meters
      PER_PANEL  → price × the template's panel count
      PER_WIDTH  → price × fabric widths required (1 when unknown)
      PERCENTAGE → price percent of the fabric cost
    """

    FIXED = "fixed"
    PER_METER = "per_meter"
    PER_SQM = "per_sqm"
    PER_DROP = "per_drop"
    PER_PANEL = "per_panel"
    PER_WIDTH = "per_width"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class SelectedOption:
    """
    An option the customer picked for this treatment.

    Attributes:
        name: Display name.
        price: Base price, interpreted according to ``method``. None is read
            as 0.
        method: Scaling rule for ``price``.
    """

    name: str
    price: float | None
    method: OptionPricingMethod = OptionPricingMethod.FIXED

    def __post_init__(self) -> None:
        if self.price is None:
            return
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise ValueError(f"price must be a number, got {self.price!r}")
        if not math.isfinite(self.price) or self.price < 0:
            raise ValueError(f"price must be a finite amount >= 0, got {self.price}")

    @property
    def base_price(self) -> float:
        """``price``, with a missing price read as 0."""
        return self.price if self.price is not None else 0.0

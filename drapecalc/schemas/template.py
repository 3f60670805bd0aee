"""
Treatment template schema: the workroom's recipe for one kind of treatment.

A template declares how manufacturing is priced (``pricing_method``), the
default fullness and hems, the lining types it can be made with, and the
waste allowance applied to fabric. The estimator picks exactly one
manufacturing strategy per calculation from the declared method.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from drapecalc.pricing.grid import PriceGrid
from drapecalc.schemas.materials import LiningItem
from drapecalc.schemas.measurement import HemConfiguration


class PricingMethod(str, Enum):
    """
    Manufacturing pricing strategies.

      PRICING_GRID → price looked up by width × drop
      BASE_RATE    → template base rate × running linear meters
      LABOR_RATE   → business labour rate × running linear meters (fallback)
    """

    PRICING_GRID = "pricing_grid"
    BASE_RATE = "base_rate"
    LABOR_RATE = "labor_rate"


@dataclass(frozen=True)
class TreatmentTemplate:
    """
    A treatment recipe.

    Attributes:
        name: Display name, e.g. "Pinch pleat curtain".
        pricing_method: Declared manufacturing strategy, or None for the
            business labour-rate fallback.
        base_rate: Price per running linear meter for BASE_RATE.
        pricing_grid: Grid for PRICING_GRID.
        fullness_ratio: Default fullness, or None to use the business default.
        hems: Template hem allowances. None means all zero.
        lining_types: Lining types offered, keyed by name.
        waste_percent: Extra fabric ordered on top of the requirement, or
            None to use the business default.
        panel_count: Panels per treatment (2 for a pair).
    """

    name: str
    pricing_method: PricingMethod | None = None
    base_rate: float | None = None
    pricing_grid: PriceGrid | None = None
    fullness_ratio: float | None = None
    hems: HemConfiguration | None = None
    lining_types: MappingProxyType[str, LiningItem] = field(
        default_factory=lambda: MappingProxyType({})
    )
    waste_percent: float | None = None
    panel_count: int = 1

    def __post_init__(self) -> None:
        # Accept plain dicts at construction sites and promote to MappingProxyType.
        if isinstance(self.lining_types, dict):
            object.__setattr__(self, "lining_types", MappingProxyType(self.lining_types))
        if self.base_rate is not None and (not math.isfinite(self.base_rate) or self.base_rate < 0):
            raise ValueError(f"base_rate must be a finite amount >= 0, got {self.base_rate}")
        if self.fullness_ratio is not None and (
            not math.isfinite(self.fullness_ratio) or self.fullness_ratio < 0
        ):
            raise ValueError(f"fullness_ratio must be >= 0, got {self.fullness_ratio}")
        if self.waste_percent is not None and (
            not math.isfinite(self.waste_percent) or self.waste_percent < 0
        ):
            raise ValueError(f"waste_percent must be >= 0, got {self.waste_percent}")
        if self.panel_count < 1:
            raise ValueError(f"panel_count must be >= 1, got {self.panel_count}")

    def lining(self, name: str) -> LiningItem | None:
        """Return the lining type called *name*, or None if the template does not offer it."""
        return self.lining_types.get(name)

"""
Material schemas: fabric and lining as read from inventory.

Inventory owns these records; the estimator only reads them. Prices may be
quoted per yard (imperial) or per meter (metric) and are normalised to a
metric basis before any arithmetic via ``metric_price``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from drapecalc.utilities.conversion import sqyard_price_to_sqm_price, yard_price_to_meter_price


class PricingUnit(str, Enum):
    """What quantity a fabric's price is quoted against."""

    PER_METER = "per_meter"
    PER_SQM = "per_sqm"


class PriceBasis(str, Enum):
    """Whether a price is quoted per meter/m² or per yard/yd²."""

    METRIC = "metric"
    IMPERIAL = "imperial"


def _check_price(name: str, value: float | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite price >= 0, got {value}")


@dataclass(frozen=True)
class FabricItem:
    """
    A fabric from inventory.

    Attributes:
        fabric_id: Inventory identifier; leftover pieces reference it.
        name: Display name.
        price_per_unit: Selling price per ``unit`` on ``price_basis``. None when
            inventory has no price; it is read as 0.
        unit: Linear (per meter/yard) or area (per m²/yd²) pricing.
        width_cm: Roll width, or None when inventory does not record it.
        price_basis: Metric or imperial price quotation.
    """

    fabric_id: str
    name: str
    price_per_unit: float | None
    unit: PricingUnit = PricingUnit.PER_METER
    width_cm: float | None = None
    price_basis: PriceBasis = PriceBasis.METRIC

    def __post_init__(self) -> None:
        _check_price("price_per_unit", self.price_per_unit)
        if self.width_cm is not None and (not math.isfinite(self.width_cm) or self.width_cm <= 0):
            raise ValueError(f"width_cm must be positive, got {self.width_cm}")

    def metric_price(self) -> float:
        """Price per meter (PER_METER) or per m² (PER_SQM); 0 when unpriced."""
        price = self.price_per_unit if self.price_per_unit is not None else 0.0
        if self.price_basis is PriceBasis.METRIC:
            return price
        if self.unit is PricingUnit.PER_SQM:
            return sqyard_price_to_sqm_price(price)
        return yard_price_to_meter_price(price)


@dataclass(frozen=True)
class LiningItem:
    """
    A lining type offered on a treatment template.

    Attributes:
        name: Lining type key, e.g. "blackout".
        price_per_meter: Price per meter (or per yard on an imperial basis).
            None is read as 0.
        price_basis: Metric or imperial price quotation.
    """

    name: str
    price_per_meter: float | None
    price_basis: PriceBasis = PriceBasis.METRIC

    def __post_init__(self) -> None:
        _check_price("price_per_meter", self.price_per_meter)

    def metric_price(self) -> float:
        """Price per meter after normalising an imperial quotation; 0 when unpriced."""
        price = self.price_per_meter if self.price_per_meter is not None else 0.0
        if self.price_basis is PriceBasis.IMPERIAL:
            return yard_price_to_meter_price(price)
        return price

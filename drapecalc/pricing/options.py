"""
Option pricing: scale each selected option by its pricing method.
"""

from __future__ import annotations

from collections.abc import Iterable

from drapecalc.quantity.calculator import FabricRequirement
from drapecalc.schemas.option import OptionPricingMethod, SelectedOption
from drapecalc.utilities.conversion import cm_to_m, sqcm_to_sqm


def price_option(
    option: SelectedOption,
    requirement: FabricRequirement,
    fabric_cost: float,
    panel_count: int = 1,
) -> float:
    """Price one option for one treatment."""
    method = option.method
    base = option.base_price
    if method is OptionPricingMethod.PER_METER:
        return base * cm_to_m(requirement.rail_width_cm)
    if method is OptionPricingMethod.PER_SQM:
        return base * sqcm_to_sqm(requirement.rail_width_cm * requirement.drop_cm)
    if method is OptionPricingMethod.PER_DROP:
        return base * cm_to_m(requirement.drop_cm)
    if method is OptionPricingMethod.PER_PANEL:
        return base * panel_count
    if method is OptionPricingMethod.PER_WIDTH:
        return base * (requirement.widths_required or 1)
    if method is OptionPricingMethod.PERCENTAGE:
        return fabric_cost * base / 100.0
    return base


def price_options(
    options: Iterable[SelectedOption],
    requirement: FabricRequirement,
    fabric_cost: float,
    panel_count: int = 1,
) -> float:
    """Total price of all selected options for one treatment."""
    return sum(
        (price_option(opt, requirement, fabric_cost, panel_count) for opt in options),
        0.0,
    )

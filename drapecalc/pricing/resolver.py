"""
Pricing resolver: manufacturing, fabric and lining cost for one treatment.

Manufacturing uses exactly one strategy, chosen from the template:

  1. PRICING_GRID  grid.lookup(rail_width, drop); a miss is reported, never 0
  2. BASE_RATE     template.base_rate × running linear meters
  3. LABOR_RATE    business labour rate × running linear meters, used only
                   when no template-specific method applies

Fabric cost is independent of the manufacturing strategy:

  PER_SQM    area_m2 × (1 + waste%) × metric price per m²
  PER_METER  running_linear_meters × (1 + waste%) × metric price per meter

Lining cost is area_m2 × the lining's metric price per meter; no lining
("none", empty, or None) costs 0.
"""

from __future__ import annotations

import logging

from drapecalc.quantity.calculator import FabricRequirement
from drapecalc.schemas.materials import FabricItem, PricingUnit
from drapecalc.schemas.result import IssueCode, ManufacturingQuote, PricingIssue
from drapecalc.schemas.template import PricingMethod, TreatmentTemplate

logger = logging.getLogger(__name__)

NO_LINING: frozenset[str] = frozenset({"", "none"})


def _waste_multiplier(waste_percent: float) -> float:
    return 1.0 + max(0.0, waste_percent) / 100.0


def select_pricing_method(template: TreatmentTemplate | None) -> PricingMethod:
    """
    Return the manufacturing strategy that applies to *template*.

    A declared strategy only applies when the template carries what it needs
    (a grid, or a base rate); otherwise the labour-rate fallback is used.
    """
    if template is None:
        return PricingMethod.LABOR_RATE
    if template.pricing_method is PricingMethod.PRICING_GRID and template.pricing_grid is not None:
        return PricingMethod.PRICING_GRID
    if template.pricing_method is PricingMethod.BASE_RATE and template.base_rate is not None:
        return PricingMethod.BASE_RATE
    return PricingMethod.LABOR_RATE


def resolve_manufacturing(
    requirement: FabricRequirement,
    template: TreatmentTemplate | None,
    labor_rate_per_meter: float,
) -> tuple[ManufacturingQuote, list[PricingIssue]]:
    """
    Price manufacturing for one treatment.

    Returns:
        The ManufacturingQuote and any configuration issues found. On a grid
        miss the quote's ``cost`` is None and a GRID_MISS issue is returned.
    """
    issues: list[PricingIssue] = []
    method = select_pricing_method(template)

    if (
        template is not None
        and template.pricing_method is PricingMethod.PRICING_GRID
        and method is not PricingMethod.PRICING_GRID
    ):
        detail = f"template {template.name!r} is priced by grid but has no grid attached"
        logger.warning(detail)
        issues.append(PricingIssue(IssueCode.MISSING_GRID, detail))

    if (
        method is PricingMethod.PRICING_GRID
        and template is not None
        and template.pricing_grid is not None
    ):
        price = template.pricing_grid.lookup(requirement.rail_width_cm, requirement.drop_cm)
        if price is None:
            detail = (
                f"grid for template {template.name!r} has no price for "
                f"{requirement.rail_width_cm:g}cm × {requirement.drop_cm:g}cm"
            )
            logger.warning(detail)
            issues.append(PricingIssue(IssueCode.GRID_MISS, detail))
        logger.debug("Manufacturing via grid: %s", price)
        return ManufacturingQuote(method=method, cost=price), issues

    if method is PricingMethod.BASE_RATE and template is not None and template.base_rate is not None:
        rate = template.base_rate
    else:
        method = PricingMethod.LABOR_RATE
        rate = max(0.0, labor_rate_per_meter)

    cost = rate * requirement.running_linear_meters
    logger.debug(
        "Manufacturing via %s: %.2f × %.2fm = %.2f",
        method.value,
        rate,
        requirement.running_linear_meters,
        cost,
    )
    return ManufacturingQuote(method=method, cost=cost, rate=rate), issues


def fabric_cost(
    requirement: FabricRequirement,
    fabric: FabricItem | None,
    waste_percent: float = 0.0,
) -> float:
    """Cost of new fabric for one treatment; 0 when no fabric is selected."""
    if fabric is None:
        return 0.0
    price = fabric.metric_price()
    if fabric.unit is PricingUnit.PER_SQM:
        quantity = requirement.area_required_m2
    else:
        quantity = requirement.running_linear_meters
    return quantity * _waste_multiplier(waste_percent) * price


def lining_cost(
    requirement: FabricRequirement,
    template: TreatmentTemplate | None,
    selected_lining: str | None,
) -> tuple[float, PricingIssue | None]:
    """
    Cost of lining for one treatment.

    Returns:
        The cost and, if the template does not offer *selected_lining*, an
        UNKNOWN_LINING issue (the cost is then 0).
    """
    if selected_lining is None or selected_lining.strip().lower() in NO_LINING:
        return 0.0, None

    lining = template.lining(selected_lining) if template is not None else None
    if lining is None:
        detail = f"lining {selected_lining!r} is not offered on this template"
        logger.warning(detail)
        return 0.0, PricingIssue(IssueCode.UNKNOWN_LINING, detail)

    return requirement.area_required_m2 * lining.metric_price(), None

"""
Estimator — wires the calculation stages from inputs to a CalculationResult.

Stages:

  1. calculate_fabric_requirement()  → FabricRequirement, or None ⇒ result None
  2. resolve_manufacturing()         → one strategy: grid / base rate / labour rate
  3. fabric_cost()                   → new fabric, waste included
  4. leftover decision               → fabric cost 0 when a confirmed piece fits
  5. lining_cost()                   → 0 for no lining
  6. price_options()                 → selected options
  7. subtotal × quantity             → total

Everything the calculation depends on travels in the EstimateContext; there
is no module-level calculator state. Re-running ``estimate`` with the latest
context is the only way to refresh a result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from drapecalc.config.registry import BusinessDefaults, get_defaults
from drapecalc.leftover.matcher import LeftoverDecision, decision_fits
from drapecalc.pricing.options import price_options
from drapecalc.pricing.resolver import fabric_cost, lining_cost, resolve_manufacturing
from drapecalc.quantity.calculator import calculate_fabric_requirement, required_leftover_length
from drapecalc.schemas.leftover import Orientation
from drapecalc.schemas.materials import FabricItem
from drapecalc.schemas.measurement import HemConfiguration, Measurement
from drapecalc.schemas.option import SelectedOption
from drapecalc.schemas.result import CalculationResult, IssueCode, PricingIssue
from drapecalc.schemas.template import TreatmentTemplate

logger = logging.getLogger(__name__)


def _business_defaults() -> BusinessDefaults:
    return get_defaults().business


@dataclass(frozen=True)
class EstimateContext:
    """
    Complete input bundle for one estimate.

    Attributes:
        measurement: Window dimensions, or None if nothing was entered.
        template: Treatment template, or None for labour-rate pricing only.
        fabric: Selected fabric, or None if not chosen yet.
        hems: Hem override; falls back to the template's hems, then zero.
        fullness_ratio: Fullness override; falls back to the template, then
            the business default.
        selected_lining: Lining type name; None or "none" for no lining.
        options: Selected options.
        leftover: Recorded leftover decision, if any.
        orientation: How the fabric is cut from the roll.
        business: Business-wide rates and defaults.
    """

    measurement: Measurement | None
    template: TreatmentTemplate | None = None
    fabric: FabricItem | None = None
    hems: HemConfiguration | None = None
    fullness_ratio: float | None = None
    selected_lining: str | None = None
    options: tuple[SelectedOption, ...] = ()
    leftover: LeftoverDecision | None = None
    orientation: Orientation = Orientation.VERTICAL
    business: BusinessDefaults = field(default_factory=_business_defaults)


def _resolve_fullness(context: EstimateContext) -> float:
    if context.fullness_ratio is not None:
        return context.fullness_ratio
    if context.template is not None and context.template.fullness_ratio is not None:
        return context.template.fullness_ratio
    return context.business.default_fullness


def _resolve_hems(context: EstimateContext) -> HemConfiguration | None:
    if context.hems is not None:
        return context.hems
    if context.template is not None:
        return context.template.hems
    return None


def _resolve_waste(context: EstimateContext) -> float:
    if context.template is not None and context.template.waste_percent is not None:
        return context.template.waste_percent
    return context.business.waste_percent


def estimate(context: EstimateContext) -> CalculationResult | None:
    """
    Price one line of treatments.

    Returns:
        The CalculationResult, or None when rail width, drop or quantity is
        missing. None means "cannot calculate yet"; callers should show no
        totals rather than zero totals.
    """
    m = context.measurement
    if m is None or not m.is_complete:
        return None

    template = context.template
    fabric = context.fabric
    panel_count = template.panel_count if template is not None else 1

    # Stage 1: requirement
    requirement = calculate_fabric_requirement(
        m.rail_width_cm,
        m.drop_cm,
        m.pooling_cm,
        fullness_ratio=_resolve_fullness(context),
        hems=_resolve_hems(context),
        quantity=m.quantity,
        fabric_width_cm=fabric.width_cm if fabric is not None else None,
        return_left_cm=m.return_left_cm,
        return_right_cm=m.return_right_cm,
        panel_count=panel_count,
        orientation=context.orientation,
    )
    if requirement is None:
        return None

    issues: list[PricingIssue] = []

    # Stage 2: manufacturing
    manufacturing, manufacturing_issues = resolve_manufacturing(
        requirement, template, context.business.labor_rate_per_meter
    )
    issues.extend(manufacturing_issues)

    # Stage 3–4: fabric, unless a confirmed leftover covers it
    fabric_total = fabric_cost(requirement, fabric, _resolve_waste(context))
    leftover_piece_id: str | None = None
    decision = context.leftover
    if decision is not None and decision.is_selected and decision.piece is not None:
        piece = decision.piece
        needed = required_leftover_length(requirement, piece.orientation)
        if fabric is None:
            detail = f"leftover piece {piece.piece_id!r} was selected but no fabric is selected"
            logger.warning(detail)
            issues.append(PricingIssue(IssueCode.LEFTOVER_MISMATCH, detail))
        elif decision_fits(decision, fabric.fabric_id, needed):
            fabric_total = 0.0
            leftover_piece_id = piece.piece_id
        else:
            detail = (
                f"leftover piece {piece.piece_id!r} no longer covers the requirement "
                f"({piece.length_cm:g}cm available, {needed:g}cm needed)"
            )
            logger.warning(detail)
            issues.append(PricingIssue(IssueCode.LEFTOVER_MISMATCH, detail))

    # Stage 5: lining
    lining_total, lining_issue = lining_cost(requirement, template, context.selected_lining)
    if lining_issue is not None:
        issues.append(lining_issue)

    # Stage 6: options
    options_total = price_options(context.options, requirement, fabric_total, panel_count)

    # Stage 7: totals
    manufacturing_total = manufacturing.cost if manufacturing.cost is not None else 0.0
    subtotal = max(0.0, fabric_total + manufacturing_total + lining_total + options_total)
    total = subtotal * requirement.quantity

    logger.debug(
        "Estimate: fabric=%.2f manufacturing=%.2f (%s) lining=%.2f options=%.2f "
        "subtotal=%.2f × %d = %.2f",
        fabric_total,
        manufacturing_total,
        manufacturing.method.value,
        lining_total,
        options_total,
        subtotal,
        requirement.quantity,
        total,
    )

    return CalculationResult(
        fabric_cost=fabric_total,
        manufacturing_cost=manufacturing_total,
        lining_cost=lining_total,
        options_cost=options_total,
        subtotal=subtotal,
        total=total,
        quantity=requirement.quantity,
        currency=context.business.currency,
        requirement=requirement,
        manufacturing=manufacturing,
        leftover_piece_id=leftover_piece_id,
        issues=tuple(issues),
    )

"""
Fabric quantity calculator.

Turns window dimensions, fullness and hem allowances into the amount of
fabric one treatment needs.

Formula (all lengths in cm):
    drop_required  = drop + pooling + header_hem + bottom_hem
    width_required = rail_width × fullness_ratio
    area_required  = drop_required × width_required            (cm², per panel set)

When the fabric's roll width is known, the calculator also works out how a
workroom would cut it. Vertical orientation joins widths side by side, one
set per panel:

    panel_width     = (width_required + returns) / panel_count
    widths/panel    = ceil(panel_width / fabric_width)
    widths          = widths/panel × panel_count
    seams           = max(0, widths − 1)
    seam_allowance  = seams × seam_hem × 2        (each seam eats from both widths)
    order_length    = widths × drop_required + seam_allowance

Side hems are not added to vertical widths.

Horizontal (railroaded) orientation runs the roll across the window, so the
roll width has to cover the drop instead:

    cut_width       = width_required + returns + 2 × side_hem
    pieces          = ceil(drop_required / fabric_width)
    seams           = max(0, pieces − 1)
    seam_allowance  = seams × seam_hem × 2
    order_length    = pieces × cut_width + seam_allowance

Those figures are reported for ordering and for option pricing; they do not
change the priced quantities (area and running linear meters).

Blinds are flat rather than gathered; calculate_blind_area() gives their
fabric area:

    blind_area = (rail_width + 2 × side_hem) × (drop + header_hem + bottom_hem)
                 × (1 + waste_percent / 100)                     (m²)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from drapecalc.schemas.leftover import Orientation
from drapecalc.schemas.measurement import HemConfiguration
from drapecalc.utilities.conversion import cm_to_m, sqcm_to_sqm

logger = logging.getLogger(__name__)

DEFAULT_FULLNESS: float = 1.0

# Guards ceil() against float noise such as 300.00000000000006 / 150.
_CEIL_EPSILON: float = 1e-9


@dataclass(frozen=True)
class FabricRequirement:
    """
    Fabric needed for one treatment.

    Attributes:
        rail_width_cm: Rail width used.
        drop_cm: Finished drop used.
        pooling_cm: Pooling used.
        fullness_ratio: Fullness used (after defaulting).
        hems: Hem allowances used (after defaulting).
        quantity: Number of identical treatments.
        drop_required_cm: Cut length of one drop, allowances included.
        width_required_cm: Gathered fabric width.
        area_required_cm2: drop_required × width_required.
        fabric_width_cm: Roll width, or None if unknown.
        widths_required: Roll widths to cut, or None without a roll width.
        seams: Seams joining those widths, or None without a roll width.
        seam_allowance_cm: Extra length consumed by seams.
        order_length_cm: Length of cloth to order, or None without a roll width.
        orientation: How the cloth is cut from the roll.
    """

    rail_width_cm: float
    drop_cm: float
    pooling_cm: float
    fullness_ratio: float
    hems: HemConfiguration
    quantity: int
    drop_required_cm: float
    width_required_cm: float
    area_required_cm2: float
    fabric_width_cm: float | None = None
    widths_required: int | None = None
    seams: int | None = None
    seam_allowance_cm: float = 0.0
    order_length_cm: float | None = None
    orientation: Orientation = Orientation.VERTICAL

    @property
    def area_required_m2(self) -> float:
        """Required area in square meters."""
        return sqcm_to_sqm(self.area_required_cm2)

    @property
    def running_linear_meters(self) -> float:
        """Gathered width in meters: the quantity base and labour rates apply to."""
        return cm_to_m(self.width_required_cm)


def _finite_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _required_length(value: Any) -> float | None:
    number = _finite_number(value)
    if number is None or number < 0:
        return None
    return number


def _optional_length(value: Any, default: float) -> float:
    number = _finite_number(value)
    if number is None or number < 0:
        return default
    return number


def _required_quantity(value: Any) -> int | None:
    number = _finite_number(value)
    if number is None or number < 1 or number != int(number):
        return None
    return int(number)


def _widths(span_cm: float, fabric_width_cm: float) -> int:
    return max(0, math.ceil(span_cm / fabric_width_cm - _CEIL_EPSILON))


def calculate_fabric_requirement(
    rail_width_cm: Any,
    drop_cm: Any,
    pooling_cm: Any = 0.0,
    fullness_ratio: Any = None,
    hems: HemConfiguration | None = None,
    quantity: Any = 1,
    *,
    fabric_width_cm: Any = None,
    return_left_cm: Any = 0.0,
    return_right_cm: Any = 0.0,
    panel_count: int = 1,
    orientation: Orientation = Orientation.VERTICAL,
) -> FabricRequirement | None:
    """
    Work out the fabric one treatment needs.

    Args:
        rail_width_cm: Rail width. Required.
        drop_cm: Finished drop. Required.
        pooling_cm: Floor pooling; missing or invalid means 0.
        fullness_ratio: Gathering multiplier; missing or invalid means 1.0.
            Zero is allowed and gives a zero width requirement.
        hems: Hem allowances; None means all zero.
        quantity: Number of identical treatments. Required, >= 1.
        fabric_width_cm: Roll width; enables the widths/seams diagnostics.
        return_left_cm: Left return, added to the cut width.
        return_right_cm: Right return, added to the cut width.
        panel_count: Panels the gathered width is split into.
        orientation: VERTICAL joins widths side by side; HORIZONTAL
            railroads the roll across the window.

    Returns:
        A FabricRequirement, or None if rail width, drop or quantity is
        missing or non-numeric. None means "insufficient data", not an error.
    """
    rail_width = _required_length(rail_width_cm)
    drop = _required_length(drop_cm)
    qty = _required_quantity(quantity)
    if rail_width is None or drop is None or qty is None:
        logger.debug(
            "Insufficient data for fabric requirement: rail_width=%r drop=%r quantity=%r",
            rail_width_cm,
            drop_cm,
            quantity,
        )
        return None

    pooling = _optional_length(pooling_cm, 0.0)
    fullness = _optional_length(fullness_ratio, DEFAULT_FULLNESS)
    hem = hems if hems is not None else HemConfiguration()

    drop_required = drop + pooling + hem.vertical_allowance_cm
    width_required = rail_width * fullness
    area_required = drop_required * width_required

    fabric_width = _finite_number(fabric_width_cm)
    widths_required: int | None = None
    seams: int | None = None
    seam_allowance = 0.0
    order_length: float | None = None
    if fabric_width is not None and fabric_width > 0:
        returns = _optional_length(return_left_cm, 0.0) + _optional_length(return_right_cm, 0.0)
        if orientation is Orientation.HORIZONTAL:
            widths_required = _widths(drop_required, fabric_width)
            cut_length = width_required + returns + 2 * hem.side_hem_cm
        else:
            panels = max(1, int(panel_count))
            widths_required = _widths((width_required + returns) / panels, fabric_width) * panels
            cut_length = drop_required
        seams = max(0, widths_required - 1)
        seam_allowance = seams * hem.seam_hem_cm * 2
        order_length = widths_required * cut_length + seam_allowance
    else:
        fabric_width = None

    requirement = FabricRequirement(
        rail_width_cm=rail_width,
        drop_cm=drop,
        pooling_cm=pooling,
        fullness_ratio=fullness,
        hems=hem,
        quantity=qty,
        drop_required_cm=drop_required,
        width_required_cm=width_required,
        area_required_cm2=area_required,
        fabric_width_cm=fabric_width,
        widths_required=widths_required,
        seams=seams,
        seam_allowance_cm=seam_allowance,
        order_length_cm=order_length,
        orientation=orientation,
    )
    logger.debug(
        "Fabric requirement: drop %.1fcm × width %.1fcm = %.0fcm² (%s, widths=%s)",
        drop_required,
        width_required,
        area_required,
        orientation.value,
        widths_required,
    )
    return requirement


def required_leftover_length(requirement: FabricRequirement, orientation: Orientation) -> float:
    """
    Length a leftover piece must have to stand in for new fabric.

    A vertical piece has to cover one cut drop; a horizontal (railroaded)
    piece runs across the window and has to cover the gathered width.
    """
    if orientation is Orientation.HORIZONTAL:
        return requirement.width_required_cm
    return requirement.drop_required_cm


def calculate_blind_area(
    rail_width_cm: Any,
    drop_cm: Any,
    hems: HemConfiguration | None = None,
    waste_percent: Any = 0.0,
) -> float | None:
    """
    Fabric area for a flat blind, in square meters.

    Side hems widen the cut on both edges; header and bottom hems lengthen it.
    Missing or invalid waste means none.

    Returns:
        The area with waste applied, or None if rail width or drop is missing.
    """
    rail_width = _required_length(rail_width_cm)
    drop = _required_length(drop_cm)
    if rail_width is None or drop is None:
        logger.debug("Insufficient data for blind area: rail_width=%r drop=%r", rail_width_cm, drop_cm)
        return None

    hem = hems if hems is not None else HemConfiguration()
    waste = _optional_length(waste_percent, 0.0)
    effective_width = rail_width + 2 * hem.side_hem_cm
    effective_drop = drop + hem.vertical_allowance_cm
    return sqcm_to_sqm(effective_width * effective_drop) * (1 + waste / 100.0)

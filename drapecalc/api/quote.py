"""
Public quoting API.

quote_window() takes raw measurement input as a form would submit it
(strings with optional unit suffixes, or numbers), normalises every field
to centimeters, and runs the estimator. It returns a QuoteReport regardless
of whether the input is usable, so callers can show which fields need
attention next to whatever could be calculated.

Recognised measurement keys:

  rail_width, drop, pooling, return_left, return_right   lengths
  quantity                                               whole number >= 1
  fullness                                               ratio, e.g. "2.5" or "250%"

Unknown keys are ignored. Blank values count as "not entered" rather than
invalid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from drapecalc.config.registry import BusinessDefaults, get_defaults
from drapecalc.estimator.estimate import EstimateContext, estimate
from drapecalc.leftover.matcher import LeftoverDecision
from drapecalc.schemas.leftover import Orientation
from drapecalc.schemas.materials import FabricItem
from drapecalc.schemas.measurement import HemConfiguration, Measurement
from drapecalc.schemas.option import SelectedOption
from drapecalc.schemas.result import CalculationResult
from drapecalc.schemas.template import TreatmentTemplate
from drapecalc.utilities.normalize import (
    LengthUnit,
    parse_length,
    parse_quantity,
    parse_ratio,
)

logger = logging.getLogger(__name__)

_LENGTH_FIELDS: tuple[str, ...] = (
    "rail_width",
    "drop",
    "pooling",
    "return_left",
    "return_right",
)


@dataclass(frozen=True)
class QuoteReport:
    """Outcome of quoting one window.

    Attributes:
        result: The CalculationResult, or None if required input is missing
            or invalid.
        invalid_fields: Keys whose values were present but could not be parsed.
        error: Message if the estimate itself failed, else None.
    """

    result: CalculationResult | None
    invalid_fields: tuple[str, ...] = ()
    error: str | None = None

    @property
    def calculable(self) -> bool:
        return self.result is not None


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def quote_window(
    raw_measurements: Mapping[str, Any],
    *,
    template: TreatmentTemplate | None = None,
    fabric: FabricItem | None = None,
    hems: HemConfiguration | None = None,
    selected_lining: str | None = None,
    options: Iterable[SelectedOption] = (),
    leftover: LeftoverDecision | None = None,
    orientation: Orientation = Orientation.VERTICAL,
    default_unit: str | LengthUnit = LengthUnit.CM,
    business: BusinessDefaults | None = None,
) -> QuoteReport:
    """
    Normalise raw measurements and price the window.

    Parameters
    ----------
    raw_measurements:
        Field name → raw value, as entered.
    template:
        Treatment template; None prices manufacturing at the labour rate.
    fabric:
        Selected fabric, if any.
    hems:
        Hem override; otherwise the template's hems apply.
    selected_lining:
        Lining type name, or None / "none" for unlined.
    options:
        Selected options.
    leftover:
        A recorded leftover decision, if one was made.
    orientation:
        How the fabric is cut from the roll; HORIZONTAL for railroaded fabric.
    default_unit:
        Unit for lengths entered without a suffix; defaults to centimeters.
    business:
        Business defaults; the registry's are used when None.

    Returns
    -------
    QuoteReport
        Always returned — never raises. ``result`` is None until rail width,
        drop and quantity are all usable.
    """
    invalid: list[str] = []
    lengths: dict[str, float | None] = {}

    for key in _LENGTH_FIELDS:
        raw = raw_measurements.get(key)
        if _is_blank(raw):
            lengths[key] = None
            continue
        value = parse_length(raw, default_unit)
        if value is None:
            invalid.append(key)
        lengths[key] = value

    quantity: int | None = None
    raw_quantity = raw_measurements.get("quantity")
    if not _is_blank(raw_quantity):
        quantity = parse_quantity(raw_quantity)
        if quantity is None:
            invalid.append("quantity")

    fullness: float | None = None
    raw_fullness = raw_measurements.get("fullness")
    if not _is_blank(raw_fullness):
        fullness = parse_ratio(raw_fullness)
        if fullness is None:
            invalid.append("fullness")

    if invalid:
        logger.debug("Ignoring invalid measurement fields: %s", ", ".join(invalid))

    measurement = Measurement(
        rail_width_cm=lengths["rail_width"],
        drop_cm=lengths["drop"],
        pooling_cm=lengths["pooling"] or 0.0,
        quantity=quantity,
        return_left_cm=lengths["return_left"] or 0.0,
        return_right_cm=lengths["return_right"] or 0.0,
    )

    context = EstimateContext(
        measurement=measurement,
        template=template,
        fabric=fabric,
        hems=hems,
        fullness_ratio=fullness,
        selected_lining=selected_lining,
        options=tuple(options),
        leftover=leftover,
        orientation=orientation,
        business=business if business is not None else get_defaults().business,
    )

    try:
        result = estimate(context)
    except Exception as exc:
        logger.exception("Estimate failed")
        return QuoteReport(result=None, invalid_fields=tuple(invalid), error=str(exc))

    return QuoteReport(result=result, invalid_fields=tuple(invalid))

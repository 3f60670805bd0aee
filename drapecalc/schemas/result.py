"""
Calculation result schema.

A CalculationResult is ephemeral: it is recomputed from the current inputs
every time any of them changes and is never persisted here. Configuration
gaps found while pricing (a grid with no cell for the size, a lining the
template does not offer) are carried as PricingIssue entries so a caller can
tell "priced at 0" apart from "could not be priced".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from drapecalc.quantity.calculator import FabricRequirement
from drapecalc.schemas.template import PricingMethod


class IssueCode(str, Enum):
    """Kinds of configuration gap reported on a result."""

    GRID_MISS = "grid_miss"
    MISSING_GRID = "missing_grid"
    UNKNOWN_LINING = "unknown_lining"
    LEFTOVER_MISMATCH = "leftover_mismatch"


@dataclass(frozen=True)
class PricingIssue:
    """A configuration gap the calling UI should warn about."""

    code: IssueCode
    detail: str


@dataclass(frozen=True)
class ManufacturingQuote:
    """
    Outcome of the manufacturing strategy.

    Attributes:
        method: Strategy that was applied.
        cost: Manufacturing cost per treatment, or None when the strategy
            could not produce a price (grid miss).
        rate: Rate per running linear meter for rate-based strategies.
    """

    method: PricingMethod
    cost: float | None
    rate: float | None = None


@dataclass(frozen=True)
class CalculationResult:
    """
    Priced estimate for one line of treatments.

    Per-treatment costs are summed into ``subtotal``; ``total`` is
    ``subtotal × quantity``. A manufacturing price that could not be found
    contributes 0 to the sums and is reported in ``issues``.

    Attributes:
        fabric_cost: Fabric per treatment (0 when a leftover piece is used).
        manufacturing_cost: Labour/making per treatment.
        lining_cost: Lining per treatment.
        options_cost: Selected options per treatment.
        subtotal: Sum of the four costs above.
        total: subtotal × quantity.
        quantity: Number of identical treatments.
        currency: ISO currency code of all amounts.
        requirement: Fabric requirement the prices were derived from.
        manufacturing: Manufacturing strategy breakdown.
        leftover_piece_id: Leftover piece used instead of new fabric, if any.
        issues: Configuration gaps found while pricing.
    """

    fabric_cost: float
    manufacturing_cost: float
    lining_cost: float
    options_cost: float
    subtotal: float
    total: float
    quantity: int
    currency: str
    requirement: FabricRequirement
    manufacturing: ManufacturingQuote
    leftover_piece_id: str | None = None
    issues: tuple[PricingIssue, ...] = ()

    @property
    def is_fully_priced(self) -> bool:
        """True when no configuration gap was found."""
        return not self.issues

    def has_issue(self, code: IssueCode) -> bool:
        """True if an issue with *code* was reported."""
        return any(issue.code is code for issue in self.issues)

"""
Leftover fabric schema: remnants recorded by earlier jobs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """How a piece of fabric runs relative to the window."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class LeftoverFabricPiece:
    """
    A remnant cut from a previous job and kept in stock.

    Pieces are never deleted automatically. Using one on a new job is a
    recorded decision (see ``drapecalc.leftover``), not an automatic swap.

    Attributes:
        piece_id: Identifier of this remnant.
        fabric_id: Inventory identifier of the fabric it was cut from.
        orientation: Direction the remnant was cut in.
        length_cm: Usable length.
        source_treatment_name: Treatment that produced the remnant.
    """

    piece_id: str
    fabric_id: str
    orientation: Orientation
    length_cm: float
    source_treatment_name: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.length_cm) or self.length_cm < 0:
            raise ValueError(f"length_cm must be a finite length >= 0, got {self.length_cm}")

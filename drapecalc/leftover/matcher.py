"""
Leftover-fabric matcher.

Finds remnants from earlier jobs that can stand in for new fabric and
proposes the smallest one that fits. Nothing is substituted automatically:
a suggestion only becomes effective once a person turns it into a
LeftoverDecision with ``select`` (or rules it out with ``decline``). Using a
remnant zeroes the fabric cost while labour stays the same, so the decision
carries who made it.

Matching rule:
    same fabric_id AND same orientation AND length_cm >= required length,
    sorted ascending by length (smallest sufficient piece first, least waste).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from drapecalc.schemas.leftover import LeftoverFabricPiece, Orientation


class DecisionStatus(str, Enum):
    """Outcome of a leftover suggestion."""

    SELECTED = "selected"
    DECLINED = "declined"


def find_leftover_candidates(
    pool: Iterable[LeftoverFabricPiece],
    fabric_id: str,
    orientation: Orientation,
    required_length_cm: float,
) -> list[LeftoverFabricPiece]:
    """
    Return pieces from *pool* that can replace new fabric, smallest first.

    Pieces of equal length keep their order in *pool*.
    """
    matches = [
        piece
        for piece in pool
        if piece.fabric_id == fabric_id
        and piece.orientation is orientation
        and piece.length_cm >= required_length_cm
    ]
    return sorted(matches, key=lambda piece: piece.length_cm)


@dataclass(frozen=True)
class LeftoverDecision:
    """
    A recorded choice about using a leftover piece.

    Attributes:
        status: SELECTED or DECLINED.
        piece: The chosen piece when SELECTED, else None.
        decided_by: Who confirmed or declined.
        required_length_cm: Length the piece had to cover when decided.
    """

    status: DecisionStatus
    piece: LeftoverFabricPiece | None
    decided_by: str
    required_length_cm: float

    def __post_init__(self) -> None:
        if not self.decided_by.strip():
            raise ValueError("decided_by must name the person making the decision")
        if self.status is DecisionStatus.SELECTED and self.piece is None:
            raise ValueError("a SELECTED decision must carry the chosen piece")
        if self.status is DecisionStatus.DECLINED and self.piece is not None:
            raise ValueError("a DECLINED decision must not carry a piece")

    @property
    def is_selected(self) -> bool:
        return self.status is DecisionStatus.SELECTED


@dataclass(frozen=True)
class LeftoverSuggestion:
    """
    Leftover pieces on offer for one treatment, awaiting a decision.

    Attributes:
        candidates: Matching pieces, smallest first (never empty).
        required_length_cm: Length a piece must cover.
    """

    candidates: tuple[LeftoverFabricPiece, ...]
    required_length_cm: float

    def __post_init__(self) -> None:
        if not self.candidates:
            raise ValueError("a suggestion needs at least one candidate")

    @property
    def default(self) -> LeftoverFabricPiece:
        """The smallest sufficient piece, offered as the default choice."""
        return self.candidates[0]

    def select(
        self,
        confirmed_by: str,
        piece: LeftoverFabricPiece | None = None,
    ) -> LeftoverDecision:
        """
        Confirm use of a piece (the default unless *piece* is given).

        Raises:
            ValueError: If *piece* is not one of the candidates.
        """
        chosen = self.default if piece is None else piece
        if chosen not in self.candidates:
            raise ValueError(f"piece {chosen.piece_id!r} is not one of the suggested candidates")
        return LeftoverDecision(
            status=DecisionStatus.SELECTED,
            piece=chosen,
            decided_by=confirmed_by,
            required_length_cm=self.required_length_cm,
        )

    def decline(self, declined_by: str) -> LeftoverDecision:
        """Record that new fabric will be used instead."""
        return LeftoverDecision(
            status=DecisionStatus.DECLINED,
            piece=None,
            decided_by=declined_by,
            required_length_cm=self.required_length_cm,
        )


def suggest_leftover(
    pool: Iterable[LeftoverFabricPiece],
    fabric_id: str,
    orientation: Orientation,
    required_length_cm: float,
) -> LeftoverSuggestion | None:
    """Return a suggestion for the matching pieces, or None if none fit."""
    candidates = find_leftover_candidates(pool, fabric_id, orientation, required_length_cm)
    if not candidates:
        return None
    return LeftoverSuggestion(candidates=tuple(candidates), required_length_cm=required_length_cm)


def decision_fits(
    decision: LeftoverDecision,
    fabric_id: str,
    required_length_cm: float,
) -> bool:
    """True if a SELECTED decision's piece still covers the current requirement."""
    piece = decision.piece
    return (
        decision.is_selected
        and piece is not None
        and piece.fabric_id == fabric_id
        and piece.length_cm >= required_length_cm
    )

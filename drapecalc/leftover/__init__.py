"""leftover — Leftover-Fabric Matcher public API."""

from drapecalc.leftover.matcher import (
    DecisionStatus,
    LeftoverDecision,
    LeftoverSuggestion,
    decision_fits,
    find_leftover_candidates,
    suggest_leftover,
)

__all__ = [
    "DecisionStatus",
    "LeftoverDecision",
    "LeftoverSuggestion",
    "decision_fits",
    "find_leftover_candidates",
    "suggest_leftover",
]

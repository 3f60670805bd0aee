"""
Measurement and hem-allowance schemas.

A Measurement is what a fitter writes down at the window. Any of the three
required figures (rail width, drop, quantity) may still be missing while the
user is typing; missing is represented as ``None`` and is distinct from zero.
Figures that are present are validated fail-fast in ``__post_init__``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


def _check_length(name: str, value: float | None) -> None:
    if value is None:
        return
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite length >= 0, got {value}")


@dataclass(frozen=True)
class Measurement:
    """
    Window dimensions in centimeters.

    Attributes:
        rail_width_cm: Length of the track or rail. None if not entered.
        drop_cm: Finished vertical length. None if not entered.
        pooling_cm: Extra length that rests on the floor.
        quantity: Number of identical treatments. None if not entered.
        return_left_cm: Fabric wrapping round the left end of the rail.
        return_right_cm: Fabric wrapping round the right end of the rail.
    """

    rail_width_cm: float | None
    drop_cm: float | None
    pooling_cm: float = 0.0
    quantity: int | None = 1
    return_left_cm: float = 0.0
    return_right_cm: float = 0.0

    def __post_init__(self) -> None:
        _check_length("rail_width_cm", self.rail_width_cm)
        _check_length("drop_cm", self.drop_cm)
        _check_length("pooling_cm", self.pooling_cm)
        _check_length("return_left_cm", self.return_left_cm)
        _check_length("return_right_cm", self.return_right_cm)
        if self.quantity is not None:
            if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
                raise ValueError(f"quantity must be an integer, got {self.quantity!r}")
            if self.quantity < 1:
                raise ValueError(f"quantity must be >= 1, got {self.quantity}")

    @property
    def is_complete(self) -> bool:
        """True once rail width, drop and quantity have all been entered."""
        return (
            self.rail_width_cm is not None
            and self.drop_cm is not None
            and self.quantity is not None
        )


@dataclass(frozen=True)
class HemConfiguration:
    """
    Per-edge fabric allowances in centimeters.

    All allowances default to zero so that an absent configuration is neutral.
    Named presets with workroom defaults live in the defaults registry and are
    only applied when a caller asks for one.

    Attributes:
        header_hem_cm: Turned over at the heading.
        bottom_hem_cm: Turned up at the hem.
        side_hem_cm: Turned in on each side of a panel.
        seam_hem_cm: Taken from each width where two widths are joined.
    """

    header_hem_cm: float = 0.0
    bottom_hem_cm: float = 0.0
    side_hem_cm: float = 0.0
    seam_hem_cm: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            _check_length(f.name, getattr(self, f.name))

    @property
    def vertical_allowance_cm(self) -> float:
        """Header plus bottom hem: what is added to every cut drop."""
        return self.header_hem_cm + self.bottom_hem_cm

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HemConfiguration:
        """Build from a plain mapping; unknown keys are ignored, missing keys are 0."""
        values: dict[str, float] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is not None:
                values[f.name] = float(raw)
        return cls(**values)

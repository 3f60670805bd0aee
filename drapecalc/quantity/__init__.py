"""quantity — Fabric Quantity Calculator public API."""

from drapecalc.quantity.calculator import (
    DEFAULT_FULLNESS,
    FabricRequirement,
    calculate_blind_area,
    calculate_fabric_requirement,
    required_leftover_length,
)

__all__ = [
    "DEFAULT_FULLNESS",
    "FabricRequirement",
    "calculate_blind_area",
    "calculate_fabric_requirement",
    "required_leftover_length",
]

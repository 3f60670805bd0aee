"""schemas — frozen data records shared across the estimator."""

from drapecalc.schemas.leftover import LeftoverFabricPiece, Orientation
from drapecalc.schemas.materials import FabricItem, LiningItem, PriceBasis, PricingUnit
from drapecalc.schemas.measurement import HemConfiguration, Measurement
from drapecalc.schemas.option import OptionPricingMethod, SelectedOption
from drapecalc.schemas.template import PricingMethod, TreatmentTemplate

__all__ = [
    # measurements
    "HemConfiguration",
    "Measurement",
    # materials
    "FabricItem",
    "LiningItem",
    "PriceBasis",
    "PricingUnit",
    # leftovers
    "LeftoverFabricPiece",
    "Orientation",
    # options
    "OptionPricingMethod",
    "SelectedOption",
    # templates
    "PricingMethod",
    "TreatmentTemplate",
]

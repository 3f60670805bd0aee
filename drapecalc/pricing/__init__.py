"""pricing — pricing grids, manufacturing/fabric/lining resolution, option pricing.

Only the grid types are re-exported here; import the resolver and option
pricing from their modules (``drapecalc.pricing.resolver``,
``drapecalc.pricing.options``), which depend on ``drapecalc.schemas``.
"""

from drapecalc.pricing.grid import (
    DropRow,
    DropRowGrid,
    FlatKeyGrid,
    GridFormatError,
    GridShape,
    GridUnit,
    NestedArrayGrid,
    PriceGrid,
    detect_shape,
    load_grid,
    load_grid_file,
)

__all__ = [
    "DropRow",
    "DropRowGrid",
    "FlatKeyGrid",
    "GridFormatError",
    "GridShape",
    "GridUnit",
    "NestedArrayGrid",
    "PriceGrid",
    "detect_shape",
    "load_grid",
    "load_grid_file",
]

"""
Pricing grids: width × drop lookup tables, one class per storage shape.

Grids reach the estimator in three storage shapes, all of which are
normalised at load time behind the ``PriceGrid`` protocol:

  NESTED_ARRAY  width breakpoints, drop breakpoints, prices[drop][width]
                (``widthRanges``/``dropRanges``/``prices`` or
                ``widths``/``heights``/``prices``)
  DROP_ROWS     ``widthColumns`` plus ``dropRows: [{drop, prices}]``
  FLAT_KEYS     ``prices: {"<width>_<drop>": price}`` with optional
                ``widthColumns``/``dropRows`` breakpoint lists

──────────────────────────────────────────────────────────────────────────────
Lookup policy
──────────────────────────────────────────────────────────────────────────────
Grid values are maximums: the cell at (W, D) prices any treatment up to W
wide and D long. ``lookup(width_cm, drop_cm)`` therefore picks the smallest
width breakpoint >= width and the smallest drop breakpoint >= drop
(nearest-ceiling). Exact breakpoints match themselves. A request above the
largest breakpoint on either axis, or a cell with no price, returns None;
oversize requests are not clamped to the last row or column. Negative and
non-finite sizes also return None.
None is "not found" and is never the same thing as a price of 0.
──────────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import csv
import logging
import math
import re
from bisect import bisect_left
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

import yaml

from drapecalc.utilities.conversion import cm_to_mm

logger = logging.getLogger(__name__)

# Largest breakpoint at or above which an unlabelled grid is read as millimeters.
MM_INFERENCE_THRESHOLD: float = 500.0

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_FLAT_KEY = re.compile(r"^\s*(?P<width>\d+(?:\.\d+)?)\s*[_x×-]\s*(?P<drop>\d+(?:\.\d+)?)\s*$")


class GridFormatError(ValueError):
    """Raised when grid data cannot be read as any known storage shape."""


class GridUnit(str, Enum):
    """Unit the grid's breakpoints are expressed in."""

    CM = "cm"
    MM = "mm"


class GridShape(str, Enum):
    """Storage shape a grid was loaded from."""

    NESTED_ARRAY = "nested_array"
    DROP_ROWS = "drop_rows"
    FLAT_KEYS = "flat_keys"


@runtime_checkable
class PriceGrid(Protocol):
    """Protocol that every grid storage shape satisfies."""

    shape: GridShape
    unit: GridUnit

    def lookup(self, width_cm: float, drop_cm: float) -> float | None:
        """
        Return the price for a treatment of the given size, or None if not found.

        Sizes above the largest breakpoint are not clamped to the last cell;
        they return None so oversize work is never under-priced.
        """
        ...


# ── Shared breakpoint handling ─────────────────────────────────────────────────


def ceiling_index(breakpoints: Sequence[float], value: float) -> int | None:
    """
    Index of the smallest breakpoint >= *value* in ascending *breakpoints*.

    Returns None if *value* exceeds every breakpoint.
    """
    idx = bisect_left(breakpoints, value)
    if idx == len(breakpoints):
        return None
    return idx


def _validate_breakpoints(axis: str, breakpoints: Sequence[float]) -> None:
    if not breakpoints:
        raise GridFormatError(f"grid has no {axis} breakpoints")
    for value in breakpoints:
        if not math.isfinite(value) or value <= 0:
            raise GridFormatError(f"{axis} breakpoints must be positive, got {value}")
    for lower, upper in zip(breakpoints, breakpoints[1:]):
        if upper <= lower:
            raise GridFormatError(
                f"{axis} breakpoints must be strictly ascending without duplicates, "
                f"got {lower} before {upper}"
            )


def _validate_cells(axis_len: int, label: str, prices: Sequence[float | None]) -> None:
    if len(prices) != axis_len:
        raise GridFormatError(f"{label} has {len(prices)} prices but expected {axis_len}")
    for price in prices:
        if price is not None and (not math.isfinite(price) or price < 0):
            raise GridFormatError(f"{label} has an invalid price {price}")


def _to_grid_units(value_cm: float, unit: GridUnit) -> float:
    return cm_to_mm(value_cm) if unit is GridUnit.MM else value_cm


def _ceiling_cell(
    widths: Sequence[float],
    drops: Sequence[float],
    unit: GridUnit,
    width_cm: float,
    drop_cm: float,
) -> tuple[int, int] | None:
    if not (math.isfinite(width_cm) and math.isfinite(drop_cm)) or width_cm < 0 or drop_cm < 0:
        return None
    w_idx = ceiling_index(widths, _to_grid_units(width_cm, unit))
    d_idx = ceiling_index(drops, _to_grid_units(drop_cm, unit))
    if w_idx is None or d_idx is None:
        return None
    return w_idx, d_idx


# ── Storage shapes ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NestedArrayGrid:
    """
    Grid stored as two breakpoint lists and a 2-D price array.

    Attributes:
        widths: Ascending width breakpoints.
        drops: Ascending drop breakpoints.
        prices: ``prices[drop_index][width_index]``; None marks an empty cell.
        unit: Unit of the breakpoints.
    """

    widths: tuple[float, ...]
    drops: tuple[float, ...]
    prices: tuple[tuple[float | None, ...], ...]
    unit: GridUnit = GridUnit.CM
    shape: GridShape = GridShape.NESTED_ARRAY

    def __post_init__(self) -> None:
        _validate_breakpoints("width", self.widths)
        _validate_breakpoints("drop", self.drops)
        if len(self.prices) != len(self.drops):
            raise GridFormatError(
                f"grid has {len(self.prices)} price rows but {len(self.drops)} drop breakpoints"
            )
        for drop, row in zip(self.drops, self.prices):
            _validate_cells(len(self.widths), f"row for drop {drop}", row)

    def lookup(self, width_cm: float, drop_cm: float) -> float | None:
        """
        Nearest-ceiling lookup; None if out of range or the cell is empty.

        A size above the largest breakpoint returns None rather than the last
        cell. Negative and non-finite sizes return None.
        """
        cell = _ceiling_cell(self.widths, self.drops, self.unit, width_cm, drop_cm)
        if cell is None:
            return None
        w_idx, d_idx = cell
        return self.prices[d_idx][w_idx]


@dataclass(frozen=True)
class DropRow:
    """One drop breakpoint and its prices across the grid's width columns."""

    drop: float
    prices: tuple[float | None, ...]


@dataclass(frozen=True)
class DropRowGrid:
    """
    Grid stored as width columns plus a list of drop rows.

    Attributes:
        widths: Ascending width column breakpoints.
        rows: Drop rows in ascending drop order.
        unit: Unit of the breakpoints.
    """

    widths: tuple[float, ...]
    rows: tuple[DropRow, ...]
    unit: GridUnit = GridUnit.CM
    shape: GridShape = GridShape.DROP_ROWS

    def __post_init__(self) -> None:
        _validate_breakpoints("width", self.widths)
        _validate_breakpoints("drop", self.drops)
        for row in self.rows:
            _validate_cells(len(self.widths), f"row for drop {row.drop}", row.prices)

    @property
    def drops(self) -> tuple[float, ...]:
        """Drop breakpoints, one per row."""
        return tuple(row.drop for row in self.rows)

    def lookup(self, width_cm: float, drop_cm: float) -> float | None:
        """
        Nearest-ceiling lookup; None if out of range or the cell is empty.

        A size above the largest breakpoint returns None rather than the last
        cell. Negative and non-finite sizes return None.
        """
        cell = _ceiling_cell(self.widths, self.drops, self.unit, width_cm, drop_cm)
        if cell is None:
            return None
        w_idx, d_idx = cell
        return self.rows[d_idx].prices[w_idx]


@dataclass(frozen=True)
class FlatKeyGrid:
    """
    Grid stored as a flat ``(width, drop) → price`` map.

    Breakpoints are the distinct widths and drops that appear in the map
    (or were listed explicitly). Combinations absent from the map are empty
    cells and look up as None.

    Attributes:
        widths: Ascending width breakpoints.
        drops: Ascending drop breakpoints.
        prices: Mapping of (width, drop) breakpoint pairs to price.
        unit: Unit of the breakpoints.
    """

    widths: tuple[float, ...]
    drops: tuple[float, ...]
    prices: MappingProxyType[tuple[float, float], float]
    unit: GridUnit = GridUnit.CM
    shape: GridShape = GridShape.FLAT_KEYS

    def __post_init__(self) -> None:
        if isinstance(self.prices, dict):
            object.__setattr__(self, "prices", MappingProxyType(self.prices))
        _validate_breakpoints("width", self.widths)
        _validate_breakpoints("drop", self.drops)
        _validate_cells(len(self.prices), "price map", tuple(self.prices.values()))

    def lookup(self, width_cm: float, drop_cm: float) -> float | None:
        """
        Nearest-ceiling lookup; None if out of range or the pair has no price.

        A size above the largest breakpoint returns None rather than the last
        cell. Negative and non-finite sizes return None.
        """
        cell = _ceiling_cell(self.widths, self.drops, self.unit, width_cm, drop_cm)
        if cell is None:
            return None
        w_idx, d_idx = cell
        return self.prices.get((self.widths[w_idx], self.drops[d_idx]))


# ── Loading ────────────────────────────────────────────────────────────────────


def _to_number(raw: Any, what: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, str):
        cleaned = _NON_NUMERIC.sub("", raw)
        try:
            return float(cleaned)
        except ValueError:
            pass
    raise GridFormatError(f"{what} is not numeric: {raw!r}")


def _to_price(raw: Any) -> float | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return _to_number(raw, "price")


def infer_unit(breakpoints: Sequence[float]) -> GridUnit:
    """Guess the unit of an unlabelled grid: any breakpoint >= 500 means millimeters."""
    if breakpoints and max(breakpoints) >= MM_INFERENCE_THRESHOLD:
        return GridUnit.MM
    return GridUnit.CM


def _resolve_unit(data: Mapping[str, Any], breakpoints: Sequence[float]) -> GridUnit:
    declared = data.get("unit")
    if declared is None:
        return infer_unit(breakpoints)
    try:
        return GridUnit(str(declared).lower())
    except ValueError:
        raise GridFormatError(f"unknown grid unit {declared!r}") from None


def _breakpoint_keys(data: Mapping[str, Any]) -> tuple[str, str] | None:
    for width_key, drop_key in (
        ("widthColumns", "dropRows"),
        ("widthRanges", "dropRanges"),
        ("widths", "heights"),
    ):
        if isinstance(data.get(width_key), list) and isinstance(data.get(drop_key), list):
            return width_key, drop_key
    return None


def detect_shape(data: Mapping[str, Any]) -> GridShape:
    """
    Decide which storage shape *data* uses.

    Raises:
        GridFormatError: If *data* matches none of the known shapes.
    """
    if not isinstance(data, Mapping):
        raise GridFormatError(f"grid data must be a mapping, got {type(data).__name__}")

    prices = data.get("prices")
    drop_rows = data.get("dropRows")
    if (
        isinstance(data.get("widthColumns"), list)
        and isinstance(drop_rows, list)
        and drop_rows
        and isinstance(drop_rows[0], Mapping)
    ):
        return GridShape.DROP_ROWS
    if isinstance(prices, Mapping):
        return GridShape.FLAT_KEYS
    if _breakpoint_keys(data) is not None and isinstance(prices, list):
        return GridShape.NESTED_ARRAY
    raise GridFormatError(f"unrecognised grid shape with keys {sorted(data)}")


def _sorted_axis(values: Sequence[Any], what: str) -> tuple[list[float], list[int]]:
    numbers = [_to_number(v, what) for v in values]
    order = sorted(range(len(numbers)), key=numbers.__getitem__)
    return [numbers[i] for i in order], order


def _load_nested(data: Mapping[str, Any]) -> NestedArrayGrid:
    keys = _breakpoint_keys(data)
    if keys is None:
        raise GridFormatError(f"nested grid is missing its breakpoint lists, got keys {sorted(data)}")
    width_key, drop_key = keys
    widths, w_order = _sorted_axis(data[width_key], "width breakpoint")
    drops, d_order = _sorted_axis(data[drop_key], "drop breakpoint")
    raw_rows = data["prices"]
    if len(raw_rows) != len(d_order):
        raise GridFormatError(
            f"grid has {len(raw_rows)} price rows but {len(d_order)} drop breakpoints"
        )
    rows: list[tuple[float | None, ...]] = []
    for d in d_order:
        raw = list(raw_rows[d] or [])
        if len(raw) != len(w_order):
            raise GridFormatError(
                f"row for drop {data[drop_key][d]} has {len(raw)} prices "
                f"but expected {len(w_order)}"
            )
        rows.append(tuple(_to_price(raw[w]) for w in w_order))
    return NestedArrayGrid(
        widths=tuple(widths),
        drops=tuple(drops),
        prices=tuple(rows),
        unit=_resolve_unit(data, widths + drops),
    )


def _load_drop_rows(data: Mapping[str, Any]) -> DropRowGrid:
    widths, w_order = _sorted_axis(data["widthColumns"], "width breakpoint")
    rows: list[DropRow] = []
    for entry in data["dropRows"]:
        if not isinstance(entry, Mapping) or "drop" not in entry or "prices" not in entry:
            raise GridFormatError(f"drop row must carry 'drop' and 'prices', got {entry!r}")
        raw = list(entry["prices"] or [])
        if len(raw) != len(w_order):
            raise GridFormatError(
                f"row for drop {entry['drop']} has {len(raw)} prices but expected {len(w_order)}"
            )
        rows.append(
            DropRow(
                drop=_to_number(entry["drop"], "drop breakpoint"),
                prices=tuple(_to_price(raw[w]) for w in w_order),
            )
        )
    rows.sort(key=lambda r: r.drop)
    return DropRowGrid(
        widths=tuple(widths),
        rows=tuple(rows),
        unit=_resolve_unit(data, widths + [r.drop for r in rows]),
    )


def _load_flat_keys(data: Mapping[str, Any]) -> FlatKeyGrid:
    prices: dict[tuple[float, float], float] = {}
    for key, raw in data["prices"].items():
        match = _FLAT_KEY.match(str(key))
        if match is None:
            raise GridFormatError(f"price key {key!r} is not of the form '<width>_<drop>'")
        price = _to_price(raw)
        if price is not None:
            prices[(float(match.group("width")), float(match.group("drop")))] = price

    explicit_widths = data.get("widthColumns")
    explicit_drops = data.get("dropRows")
    if isinstance(explicit_widths, list) and explicit_widths:
        widths = sorted(_to_number(v, "width breakpoint") for v in explicit_widths)
    else:
        widths = sorted({w for w, _ in prices})
    if isinstance(explicit_drops, list) and explicit_drops:
        drops = sorted(_to_number(v, "drop breakpoint") for v in explicit_drops)
    else:
        drops = sorted({d for _, d in prices})

    return FlatKeyGrid(
        widths=tuple(widths),
        drops=tuple(drops),
        prices=MappingProxyType(prices),
        unit=_resolve_unit(data, widths + drops),
    )


_LOADERS = {
    GridShape.NESTED_ARRAY: _load_nested,
    GridShape.DROP_ROWS: _load_drop_rows,
    GridShape.FLAT_KEYS: _load_flat_keys,
}


def load_grid(data: Mapping[str, Any]) -> PriceGrid:
    """
    Normalise raw grid data of any known storage shape into a PriceGrid.

    Raises:
        GridFormatError: If the shape is unknown or the contents are malformed.
    """
    shape = detect_shape(data)
    grid = _LOADERS[shape](data)
    logger.debug(
        "Loaded %s grid (%s): %d widths × %d drops",
        shape.value,
        grid.unit.value,
        len(grid.widths),
        len(grid.drops),
    )
    return grid


def _read_csv_grid(path: Path) -> dict[str, Any]:
    with open(path, newline="", encoding="utf-8") as f:
        rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        raise GridFormatError(f"CSV grid {path} needs a header row and at least one drop row")
    header, body = rows[0], rows[1:]
    widths = header[1:]
    while widths and not widths[-1].strip():
        widths.pop()
    return {
        "widths": widths,
        "heights": [row[0] for row in body],
        "prices": [(row[1:] + [""] * len(widths))[: len(widths)] for row in body],
    }


def load_grid_file(path: str | Path) -> PriceGrid:
    """
    Load a grid from a YAML, JSON or CSV file.

    CSV layout: the header row lists width breakpoints after a corner label,
    each following row starts with its drop breakpoint. Blank cells are empty.

    Raises:
        FileNotFoundError: If *path* does not exist.
        GridFormatError: If the file cannot be parsed as a grid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pricing grid file not found: {path}")

    if path.suffix.lower() == ".csv":
        data = _read_csv_grid(path)
    else:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise GridFormatError(f"Failed to parse pricing grid file {path}: {exc}") from exc
    return load_grid(data)

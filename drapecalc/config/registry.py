"""
Defaults registry: loads business-wide defaults and hem presets from YAML,
validates them, and exposes a read-only query API.

The registry is a module-level singleton; call get_defaults() to obtain it.
Tables are loaded and validated once at import time. Nothing writes to the
registry after startup. Instantiate DefaultsRegistry directly with another
data directory to use different tables (e.g. in tests).

Data files (under ``drapecalc/config/data``):

  defaults.yaml     business: labor_rate_per_meter, currency,
                    default_fullness, waste_percent
  hem_presets.yaml  entries: [{id, header_hem_cm, bottom_hem_cm,
                    side_hem_cm, seam_hem_cm, notes}]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import yaml

from drapecalc.schemas.measurement import HemConfiguration

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"


class DefaultsError(ValueError):
    """Raised when a defaults table is present but malformed."""


@dataclass(frozen=True)
class BusinessDefaults:
    """
    Rates and defaults that apply across all templates of a business.

    Attributes:
        labor_rate_per_meter: Fallback manufacturing rate per running linear meter.
        currency: ISO currency code for all amounts.
        default_fullness: Fullness used when neither input nor template gives one.
        waste_percent: Waste applied when a template does not set its own.
    """

    labor_rate_per_meter: float = 0.0
    currency: str = "GBP"
    default_fullness: float = 1.0
    waste_percent: float = 0.0

    def __post_init__(self) -> None:
        for name in ("labor_rate_per_meter", "default_fullness", "waste_percent"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite value >= 0, got {value}")
        if not self.currency.strip():
            raise ValueError("currency must not be empty")


class DefaultsRegistry:
    """
    Read-only registry of default tables.

    ``hem_presets`` is wrapped in MappingProxyType after loading and is
    immutable for the lifetime of the registry instance.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = Path(data_dir)

        # Type annotations only; actual assignment happens in _load_*
        self.business: BusinessDefaults
        self.hem_presets: MappingProxyType[str, HemConfiguration]

        self._load_all()

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Defaults data file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise DefaultsError(f"Failed to parse defaults data file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DefaultsError(f"Defaults data file {path} must contain a mapping")
        return cast(dict[str, Any], data)

    def _load_all(self) -> None:
        self._load_business()
        self._load_hem_presets()
        logger.debug(
            "Loaded defaults from %s: %d hem presets", self._data_dir, len(self.hem_presets)
        )

    def _load_business(self) -> None:
        data = self._load_yaml("defaults.yaml")
        section = data.get("business")
        if not isinstance(section, dict):
            raise DefaultsError("defaults.yaml must define a 'business' mapping")
        try:
            self.business = BusinessDefaults(
                labor_rate_per_meter=float(section.get("labor_rate_per_meter", 0.0)),
                currency=str(section.get("currency", "GBP")),
                default_fullness=float(section.get("default_fullness", 1.0)),
                waste_percent=float(section.get("waste_percent", 0.0)),
            )
        except (TypeError, ValueError) as exc:
            raise DefaultsError(f"Invalid business defaults: {exc}") from exc

    def _load_hem_presets(self) -> None:
        data = self._load_yaml("hem_presets.yaml")
        result: dict[str, HemConfiguration] = {}
        for entry in data.get("entries", []):
            preset_id = entry["id"]
            if preset_id in result:
                raise DefaultsError(f"Duplicate hem preset id {preset_id!r}")
            try:
                result[preset_id] = HemConfiguration.from_mapping(entry)
            except (TypeError, ValueError) as exc:
                raise DefaultsError(f"Invalid hem preset {preset_id!r}: {exc}") from exc
        self.hem_presets = MappingProxyType(result)

    # ── Query API ──────────────────────────────────────────────────────────────

    def hem_preset(self, preset_id: str) -> HemConfiguration:
        """Return the named hem preset.

        Raises KeyError if no preset has that id.
        """
        try:
            return self.hem_presets[preset_id]
        except KeyError:
            raise KeyError(f"No hem preset {preset_id!r}") from None


# ── Module-level singleton ─────────────────────────────────────────────────────
#
# Initialized eagerly at import time. The registry is read-only after
# construction, so sharing it is safe.

_defaults: DefaultsRegistry = DefaultsRegistry()


def get_defaults() -> DefaultsRegistry:
    """Return the module-level defaults registry singleton."""
    return _defaults

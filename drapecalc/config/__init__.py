"""config — business defaults and hem presets loaded from YAML."""

from drapecalc.config.registry import BusinessDefaults, DefaultsError, DefaultsRegistry, get_defaults

__all__ = ["BusinessDefaults", "DefaultsError", "DefaultsRegistry", "get_defaults"]

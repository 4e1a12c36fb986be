"""
Configuration: default.yaml + user overrides.

Lookup order:
1. explicit config_path
2. TABLE_ASSERTER_CONFIG environment variable
3. packaged default.yaml only
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "TABLE_ASSERTER_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


@dataclass(frozen=True)
class AsserterConfig:
    """Settings used by value conversion and diagnostics."""
    sequence_separator: str = ", "
    boolean_true_values: tuple[str, ...] = ("true",)
    boolean_false_values: tuple[str, ...] = ("false",)
    enum_match_values: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AsserterConfig":
        """Build from the parsed YAML structure (missing keys keep defaults)."""
        conversion = data.get("conversion", {}) or {}
        defaults = cls()
        return cls(
            sequence_separator=str(
                conversion.get("sequence_separator", defaults.sequence_separator)
            ),
            boolean_true_values=tuple(
                str(v).lower()
                for v in conversion.get("boolean_true_values", defaults.boolean_true_values)
            ),
            boolean_false_values=tuple(
                str(v).lower()
                for v in conversion.get("boolean_false_values", defaults.boolean_false_values)
            ),
            enum_match_values=bool(
                conversion.get("enum_match_values", defaults.enum_match_values)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "conversion": {
                "sequence_separator": self.sequence_separator,
                "boolean_true_values": list(self.boolean_true_values),
                "boolean_false_values": list(self.boolean_false_values),
                "enum_match_values": self.enum_match_values,
            },
        }


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping; a missing or empty file yields {}."""
    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; override wins."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> AsserterConfig:
    """
    Load settings.

    Args:
        config_path: YAML file overriding the packaged defaults

    Returns:
        AsserterConfig
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)

    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)

    if config_path is not None:
        data = _merge(data, _read_yaml(config_path))

    return AsserterConfig.from_dict(data)


@lru_cache(maxsize=1)
def get_default_config() -> AsserterConfig:
    """Cached load_config() for asserters created without explicit settings."""
    return load_config()

# PROV: MOTIONDIFF.CONFIG.01
# WHY: Load the comparison policy (tolerance, exclusions, key/pointer rules) from YAML.

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ERROR, ConfigError, make_error
from .maps import DOUBLE_ERROR_MARGIN

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


@dataclass(frozen=True)
class DiffConfig:
    tolerance: float = DOUBLE_ERROR_MARGIN
    excluded_keys: tuple[str, ...] = (
        "pointerProperties",
        "pointerCoords",
        "source",
        "deviceId",
        "action",
    )
    key_order_sensitive: bool = True
    single_pointer_coords_only: bool = True


DEFAULT_CONFIG = DiffConfig()


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override dict into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf8") as f:
            obj = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            make_error(ERROR.CONFIG_INVALID, f"cannot read config: {e}", path=str(path))
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            make_error(ERROR.CONFIG_INVALID, f"invalid YAML: {e}", path=str(path))
        ) from e
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(
            make_error(ERROR.CONFIG_INVALID, "config must be a YAML mapping", path=str(path))
        )
    return obj


def config_from_dict(obj: dict[str, Any], *, path: str | None = None) -> DiffConfig:
    known = {"tolerance", "excluded_keys", "key_order_sensitive", "single_pointer_coords_only"}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ConfigError(
            make_error(ERROR.CONFIG_INVALID, f"unknown config keys: {', '.join(unknown)}", path=path)
        )

    tolerance = obj.get("tolerance", DEFAULT_CONFIG.tolerance)
    if (
        not isinstance(tolerance, (int, float))
        or isinstance(tolerance, bool)
        or not math.isfinite(float(tolerance))
        or tolerance < 0
    ):
        raise ConfigError(
            make_error(
                ERROR.CONFIG_INVALID,
                f"tolerance must be a finite number >= 0 (got {tolerance!r})",
                path=path,
                field="tolerance",
            )
        )

    excluded = obj.get("excluded_keys", list(DEFAULT_CONFIG.excluded_keys))
    if not isinstance(excluded, list) or not all(isinstance(k, str) for k in excluded):
        raise ConfigError(
            make_error(
                ERROR.CONFIG_INVALID,
                "excluded_keys must be a list of strings",
                path=path,
                field="excluded_keys",
            )
        )

    flags: dict[str, bool] = {}
    for key in ("key_order_sensitive", "single_pointer_coords_only"):
        val = obj.get(key, getattr(DEFAULT_CONFIG, key))
        if not isinstance(val, bool):
            raise ConfigError(
                make_error(ERROR.CONFIG_INVALID, f"{key} must be a boolean", path=path, field=key)
            )
        flags[key] = val

    return DiffConfig(
        tolerance=float(tolerance),
        excluded_keys=tuple(excluded),
        key_order_sensitive=flags["key_order_sensitive"],
        single_pointer_coords_only=flags["single_pointer_coords_only"],
    )


def load_config(config_path: Path | None = None) -> DiffConfig:
    """Load the packaged defaults, optionally merged with a custom config."""
    config = _read_yaml(DEFAULT_CONFIG_PATH)
    if config_path:
        config = deep_merge(config, _read_yaml(config_path))
    return config_from_dict(config, path=str(config_path) if config_path else None)

"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.progimg/config.yaml)
  3. Project config   (./progimg.yaml)
  4. Environment variables (PROGIMG_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from progimg.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".progimg" / "config.yaml"
_PROJECT_CONFIG_NAME = "progimg.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "PROGIMG_ENABLE": "progressive_enable",
    "PROGIMG_SRCSET_WIDTHS": "srcset_widths",
    "PROGIMG_SIZES": "sizes",
    "PROGIMG_LAZY_ENABLE": "lazy_enable",
    "PROGIMG_LAZY_SKIP_FIRST": "lazy_skip_first",
    "PROGIMG_SUPPORTED_DOMAINS": "supported_domains",
    "PROGIMG_IGNORE_FORMATS": "ignore_formats",
    "PROGIMG_DEV_MODE": "dev_mode",
    "PROGIMG_CACHE_PATH": "cache_path",
    "PROGIMG_TIMEOUT": "timeout",
    "PROGIMG_MAX_ATTEMPTS": "max_attempts",
    "PROGIMG_DIMENSIONS_QUERY": "dimensions_query",
    "PROGIMG_PLACEHOLDER_QUERY": "placeholder_query",
    "PROGIMG_WEBP_QUALITY": "webp_quality",
    "PROGIMG_MAX_CONCURRENCY": "max_concurrency",
    "PROGIMG_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "lazy_skip_first": int,
    "timeout": float,
    "max_attempts": int,
    "max_concurrency": int,
    "webp_quality": int,
}

_BOOL_KEYS = {"progressive_enable", "lazy_enable", "dev_mode"}
_LIST_KEYS = {"srcset_widths", "supported_domains", "ignore_formats"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments (highest priority)
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for progimg.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read PROGIMG_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        coerced = _coerce_env_value(config_key, value)
        if coerced is None:
            continue
        result[config_key] = coerced
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type.

    Unrecognized boolean values return None and leave the key unset.
    """
    if key in _BOOL_KEYS:
        flag = value.strip().lower()
        if flag in _TRUTHY:
            return True
        if flag in _FALSY:
            return False
        logger.warning("Ignoring env var for '%s': not a boolean: %s", key, value)
        return None

    if key in _LIST_KEYS:
        items = [item.strip() for item in value.split(",") if item.strip()]
        if key == "srcset_widths":
            try:
                return [int(item) for item in items]
            except ValueError:
                logger.warning("Cannot parse srcset widths from env: %s", value)
                return value
        return items

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value

"""YAML options loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from progimg.config.schema import ImageOptions
from progimg.errors.exceptions import ConfigError


def load_options_yaml(path: str | Path) -> ImageOptions:
    """Load an options YAML file and return validated ImageOptions.

    The file may either hold the options mapping directly or nest it under a
    top-level ``images`` key.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options YAML not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return ImageOptions()
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected YAML mapping, got {type(raw).__name__} in {path}", path=path)

    if "images" in raw:
        raw = raw["images"] or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Invalid options YAML: 'images' is not a mapping in {path}", path=path)

    try:
        return ImageOptions.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid options in {path}: {e}", path=path) from e

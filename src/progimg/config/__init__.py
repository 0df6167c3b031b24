"""Configuration — option models, defaults and source hierarchy."""

from progimg.config.hierarchy import load_config_hierarchy
from progimg.config.schema import (
    ImageOptions,
    LazyOptions,
    ProgressiveOptions,
    ProviderOptions,
    resolve_options,
)

__all__ = [
    "ImageOptions",
    "LazyOptions",
    "ProgressiveOptions",
    "ProviderOptions",
    "load_config_hierarchy",
    "resolve_options",
]

"""Pydantic models for image enrichment options."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from progimg.config import defaults


class ProgressiveOptions(BaseModel):
    enable: bool = defaults.DEFAULT_PROGRESSIVE_ENABLE
    srcset_widths: list[int] = Field(default_factory=lambda: list(defaults.DEFAULT_SRCSET_WIDTHS))
    sizes: str | None = defaults.DEFAULT_SIZES

    @field_validator("srcset_widths")
    @classmethod
    def _positive_widths(cls, value: list[int]) -> list[int]:
        if any(w <= 0 for w in value):
            raise ValueError("srcset widths must be positive")
        return value


class LazyOptions(BaseModel):
    enable: bool = defaults.DEFAULT_LAZY_ENABLE
    skip_first: int = Field(default=defaults.DEFAULT_LAZY_SKIP_FIRST, ge=0)


class ProviderOptions(BaseModel):
    """Remote image service request shapes and transport settings."""

    dimensions_query: str = defaults.DEFAULT_DIMENSIONS_QUERY
    placeholder_query: str = defaults.DEFAULT_PLACEHOLDER_QUERY
    timeout: float = Field(default=defaults.DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(default=defaults.DEFAULT_MAX_ATTEMPTS, ge=1)
    webp_quality: int = Field(default=defaults.DEFAULT_WEBP_QUALITY, ge=1, le=100)


class ImageOptions(BaseModel):
    progressive: ProgressiveOptions = Field(default_factory=ProgressiveOptions)
    lazy: LazyOptions = Field(default_factory=LazyOptions)
    supported_domains: list[str] = Field(
        default_factory=lambda: list(defaults.DEFAULT_SUPPORTED_DOMAINS)
    )
    ignore_formats: list[str] = Field(default_factory=lambda: list(defaults.DEFAULT_IGNORE_FORMATS))
    cache_path: str | None = defaults.DEFAULT_CACHE_PATH
    dev_mode: bool = defaults.DEFAULT_DEV_MODE
    provider: ProviderOptions = Field(default_factory=ProviderOptions)
    max_concurrency: int = Field(default=defaults.DEFAULT_MAX_CONCURRENCY, ge=1)

    @property
    def enabled(self) -> bool:
        """True when the enrichment path is switched on at all."""
        return self.progressive.enable and not self.dev_mode

    @classmethod
    def from_flat(cls, config: dict[str, Any]) -> ImageOptions:
        """Build options from the flat dict produced by the config hierarchy."""
        merged = {**defaults.get_defaults(), **config}
        return cls(
            progressive=ProgressiveOptions(
                enable=merged["progressive_enable"],
                srcset_widths=merged["srcset_widths"],
                sizes=merged["sizes"],
            ),
            lazy=LazyOptions(
                enable=merged["lazy_enable"],
                skip_first=merged["lazy_skip_first"],
            ),
            supported_domains=merged["supported_domains"],
            ignore_formats=merged["ignore_formats"],
            cache_path=merged["cache_path"],
            dev_mode=merged["dev_mode"],
            provider=ProviderOptions(
                dimensions_query=merged["dimensions_query"],
                placeholder_query=merged["placeholder_query"],
                timeout=merged["timeout"],
                max_attempts=merged["max_attempts"],
                webp_quality=merged["webp_quality"],
            ),
            max_concurrency=merged["max_concurrency"],
        )


def resolve_options(user_options: ImageOptions | dict[str, Any] | None = None) -> ImageOptions:
    """Apply defaults to (possibly partial, nested) user options."""
    if user_options is None:
        return ImageOptions()
    if isinstance(user_options, ImageOptions):
        return user_options
    return ImageOptions.model_validate(user_options)

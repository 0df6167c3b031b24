"""Pipeline — per-reference orchestration of filter, cache, provider, markup."""

from progimg.pipeline.engine import DefaultRenderer, ImagePipeline

__all__ = ["DefaultRenderer", "ImagePipeline"]

"""progimg — progressive image markup with cached remote metadata."""

from progimg.config.schema import ImageOptions, resolve_options
from progimg.pipeline.engine import ImagePipeline
from progimg.types import ImageMetadata, ImageReference, ParsedDescriptor

__version__ = "0.1.0"

__all__ = [
    "ImageMetadata",
    "ImageOptions",
    "ImagePipeline",
    "ImageReference",
    "ParsedDescriptor",
    "__version__",
    "resolve_options",
]

"""Remote metadata provider — dimensions and placeholders over HTTP."""

from progimg.provider.client import MetadataProvider
from progimg.provider.placeholder import image_to_data_url, thumbhash_to_data_url

__all__ = ["MetadataProvider", "image_to_data_url", "thumbhash_to_data_url"]

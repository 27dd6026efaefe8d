"""Person image lookup."""
from src.images.cache import ImageCache
from src.images.resolver import AssetImageResolver, HttpImageResolver, build_resolver

__all__ = ["ImageCache", "AssetImageResolver", "HttpImageResolver", "build_resolver"]

"""Application cache – cache metadata accumulation and fingerprints."""
from facet_lists.application.cache.keys import CacheKey
from facet_lists.application.cache.metadata import CacheableDependency, CacheableMetadata

__all__ = ["CacheKey", "CacheableDependency", "CacheableMetadata"]

"""Infrastructure adapters for cache backends and serialization."""

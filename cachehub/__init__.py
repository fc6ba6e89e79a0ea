"""
CacheHub

Typed cache-access facade over a key/value backend with cache-aside
helpers and prefix-based invalidation.
"""

__version__ = "0.1.0"

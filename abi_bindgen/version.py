"""
Version of the abi-bindgen package.

Generated modules never carry this version; their text depends only on the
input ABI and the mapper configuration.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def version() -> str:
    """Human-friendly version string, e.g. '0.1.0'."""
    return __version__


__all__ = ["__version__", "version"]

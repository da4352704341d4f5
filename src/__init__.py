# src/__init__.py — v1
"""specscout: cost-governed LLM detection of API specification files."""

from specscout.version import __version__

__all__ = ["__version__"]

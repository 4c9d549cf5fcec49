"""Top-level package for BetterSlugs.

This package computes pattern-driven slugs for localized content records and
keeps them synchronized as contributing fields change. The main entry point
is `SlugFieldController`.
"""

from .orchestrator import SlugFieldController

__all__ = ["SlugFieldController", "__version__"]

__version__ = "0.1.0"

"""Telemetry scaffolds.

This package emits structured events for slug scheduling and updates.
"""

from .logger import SlugLogger, configure_cli_logging

__all__ = ["SlugLogger", "configure_cli_logging"]

"""
Craps Quest Configuration.

Environment variables, settings, and logging configuration.
"""

from src.config.settings import Settings, build_rng, configure_logging, get_settings

__all__ = ["Settings", "build_rng", "configure_logging", "get_settings"]

"""Core: config and application bootstrap (exception handlers, lifespan, limiter).

Single place for settings.
"""

from docroute.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]

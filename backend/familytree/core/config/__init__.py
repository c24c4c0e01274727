"""Configuration module for the family tree backend.

Usage:
    from familytree.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from familytree.core.config.enums import Environment, Locale
from familytree.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "Locale",
    "settings",
]

# Singleton settings instance
settings = Settings()

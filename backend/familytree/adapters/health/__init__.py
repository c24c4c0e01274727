"""Health probe adapters."""

from familytree.adapters.health.database import DatabaseHealthProbe

__all__ = ["DatabaseHealthProbe"]

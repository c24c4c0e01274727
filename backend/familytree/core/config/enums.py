"""Configuration enums for type-safe settings.

These enums inherit from str to keep JSON serialization compatibility.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environments.

    Controls environment-specific behavior like logging verbosity and cookie flags.
    """

    LOCAL = "local"
    TEST = "test"
    DEV = "dev"
    PRD = "prd"


class Locale(str, Enum):
    """Languages available for user-facing error messages."""

    EN = "en"
    VI = "vi"

"""Domain exceptions for guest access codes.

Messages reach the guest directly, so they come from the localized catalog.
"""

from familytree.core.exceptions import AuthenticationError, BadRequestError, NotFoundException
from familytree.core.messages import message


class AccessCodeRequiredError(BadRequestError):
    """Raised when redemption is attempted without a code."""

    def __init__(self):
        """Initialize with the localized message."""
        super().__init__(message("access_code_required"))


class InvalidAccessCodeError(BadRequestError):
    """Raised when a code does not have the issued length."""

    def __init__(self):
        """Initialize with the localized message."""
        super().__init__(message("access_code_invalid"))


class AccessCodeNotFoundError(NotFoundException):
    """Raised when no guest editor holds the code."""

    def __init__(self):
        """Initialize with the localized message."""
        super().__init__(message("access_code_unknown"))


class AccessCodeExpiredError(AuthenticationError):
    """Raised when the code is older than its time to live."""

    def __init__(self):
        """Initialize with the localized message."""
        super().__init__(message("access_code_expired"))

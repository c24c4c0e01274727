"""Access guard exceptions."""

from familytree.core.exceptions import PermissionException


class ActionForbiddenError(PermissionException):
    """Raised when the caller's role never permits the action."""


class OwnProfileOnlyError(PermissionException):
    """Raised when a guest writes a member other than its own."""

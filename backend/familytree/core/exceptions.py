"""Shared exceptions module.

Domain exceptions subclass one of the bases below. The API layer maps each base
to an HTTP status, so new domain errors need no handler registration.
"""

from typing import Optional

from pydantic import ValidationError


class FamilyTreeException(Exception):
    """Base exception for the family tree backend."""

    pass


class BadRequestError(FamilyTreeException):
    """Raised for malformed input or a request that violates a domain rule."""

    def __init__(self, message: Optional[str] = "Bad request"):
        """Create a new BadRequestError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class AuthenticationError(FamilyTreeException):
    """Raised when the caller has no valid session or presents bad credentials."""

    def __init__(self, message: Optional[str] = "Not authenticated"):
        """Create a new AuthenticationError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class PermissionException(FamilyTreeException):
    """Exception raised when a user does not have the necessary permissions to perform an action."""

    def __init__(
        self,
        message: Optional[str] = "User does not have the right to perform this action",
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(FamilyTreeException):
    """Exception raised when an object is not found or is not visible to the caller."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class ConflictError(FamilyTreeException):
    """Raised when a write collides with existing state."""

    def __init__(self, message: Optional[str] = "Conflict"):
        """Create a new ConflictError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: The dictionary representation of the validation error.

    """
    error_messages = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = ".".join(str(part) for part in loc)
        error_messages.append({field: error["msg"]})

    return {"errors": error_messages}

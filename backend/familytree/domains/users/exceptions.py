"""Domain exceptions for users."""

from familytree.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundException,
)


class EmailAlreadyInUseError(ConflictError):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        """Initialize with the duplicate email."""
        self.email = email
        super().__init__("Email already in use")


class InvalidCredentialsError(AuthenticationError):
    """Raised when sign-in fails. Does not say which part was wrong."""

    def __init__(self):
        """Initialize with a generic message."""
        super().__init__("Invalid email or password")


class IncorrectPasswordError(BadRequestError):
    """Raised when a password confirmation does not match."""

    def __init__(self, message: str = "Current password is incorrect"):
        """Initialize with the rejection message."""
        super().__init__(message)


class UserNotFoundError(NotFoundException):
    """Raised when the signed-in user no longer exists."""

    def __init__(self, user_id: int):
        """Initialize with the missing user id."""
        self.user_id = user_id
        super().__init__("User not found")

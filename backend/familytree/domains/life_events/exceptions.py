"""Domain exceptions for life events."""

from familytree.core.exceptions import BadRequestError, ConflictError, NotFoundException


class MarriageNotFoundError(NotFoundException):
    """Raised when two members have no marriage on record."""

    def __init__(self, message: str = "No marriage found between these members"):
        """Initialize with the lookup failure message."""
        super().__init__(message)


class AlreadyDivorcedError(ConflictError):
    """Raised when recording a divorce for a couple that is already divorced."""

    def __init__(self):
        """Initialize with the conflict message."""
        super().__init__("This couple is already divorced")


class AlreadyMarriedError(ConflictError):
    """Raised when two members already have a marriage on record."""

    def __init__(self):
        """Initialize with the conflict message."""
        super().__init__("These members already have a marriage on record")


class InvalidLifeEventDateError(BadRequestError):
    """Raised when a marriage, divorce or birth date breaks an ordering rule."""


class MissingParentError(BadRequestError):
    """Raised when a birth record is requested for a member without a parent."""

    def __init__(self, child_id: int):
        """Initialize with the child id."""
        self.child_id = child_id
        super().__init__("This member has no parent on record")

"""Domain exceptions for passing records."""

from familytree.core.exceptions import BadRequestError, ConflictError, NotFoundException


class PassingRecordNotFoundError(NotFoundException):
    """Raised when a passing record does not exist in the tree."""

    def __init__(self, record_id: int):
        """Initialize with the requested record id."""
        self.record_id = record_id
        super().__init__("Passing record not found")


class DuplicatePassingRecordError(ConflictError):
    """Raised when a member already has a passing record."""

    def __init__(self, member_id: int):
        """Initialize with the member id."""
        self.member_id = member_id
        super().__init__("This member already has a passing record")


class InvalidPassingDateError(BadRequestError):
    """Raised when the date of passing is impossible for the member."""

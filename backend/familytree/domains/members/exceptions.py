"""Domain exceptions for family members."""

from familytree.core.exceptions import BadRequestError, NotFoundException


class FamilyMemberNotFoundError(NotFoundException):
    """Raised when a member does not exist or is outside the caller's tree."""

    def __init__(self, member_id: int):
        """Initialize with the requested member id."""
        self.member_id = member_id
        super().__init__("Family member not found")


class RootMemberDeletionError(BadRequestError):
    """Raised when deleting the root person of a tree."""

    def __init__(self, member_id: int):
        """Initialize with the root member id."""
        self.member_id = member_id
        super().__init__("The root person of a family tree cannot be deleted")


class InvalidMemberDataError(BadRequestError):
    """Raised when member data breaks a genealogical rule."""


class ProfilePictureNotFoundError(NotFoundException):
    """Raised when a member has no stored picture."""

    def __init__(self, member_id: int):
        """Initialize with the member id."""
        self.member_id = member_id
        super().__init__("Profile picture not found")

"""Domain exceptions for family trees."""

from familytree.core.exceptions import NotFoundException


class FamilyTreeNotFoundError(NotFoundException):
    """Raised when a tree does not exist or is not visible to the caller."""

    def __init__(self, family_tree_id: int):
        """Initialize with the requested tree id."""
        self.family_tree_id = family_tree_id
        super().__init__("Family tree not found")

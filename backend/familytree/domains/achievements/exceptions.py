"""Domain exceptions for achievements."""

from familytree.core.exceptions import ConflictError, NotFoundException


class AchievementNotFoundError(NotFoundException):
    """Raised when an achievement does not exist in the tree."""

    def __init__(self, achievement_id: int):
        """Initialize with the requested achievement id."""
        self.achievement_id = achievement_id
        super().__init__("Achievement not found")


class AchievementTypeNotFoundError(NotFoundException):
    """Raised when an achievement type does not belong to the tree."""

    def __init__(self, achievement_type_id: int):
        """Initialize with the requested type id."""
        self.achievement_type_id = achievement_type_id
        super().__init__("Achievement type not found")


class DuplicateAchievementTypeError(ConflictError):
    """Raised when a tree already has a type with the same name."""

    def __init__(self, type_name: str):
        """Initialize with the clashing name."""
        self.type_name = type_name
        super().__init__(f"Achievement type '{type_name}' already exists")

"""Models for the application."""

from ._base import Base
from .achievement import Achievement, AchievementType
from .change_log import ChangeLog
from .family_member import FamilyMember, Occupation, PlaceOfOrigin
from .family_tree import FamilyTree
from .guest_editor import GuestEditor
from .passing_record import BuriedPlace, CauseOfDeath, PassingRecord
from .spouse_relationship import SpouseRelationship
from .user import TreeOwner, User

__all__ = [
    "Achievement",
    "AchievementType",
    "Base",
    "BuriedPlace",
    "CauseOfDeath",
    "ChangeLog",
    "FamilyMember",
    "FamilyTree",
    "GuestEditor",
    "Occupation",
    "PassingRecord",
    "PlaceOfOrigin",
    "SpouseRelationship",
    "TreeOwner",
    "User",
]

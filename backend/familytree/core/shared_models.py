"""Shared models for the backend."""

from enum import Enum


class SessionRole(str, Enum):
    """Role carried by a resolved session."""

    OWNER = "owner"
    GUEST = "guest"


class ChangeAction(str, Enum):
    """Operation kind recorded in the change log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class EntityType(str, Enum):
    """Entity types that produce change-log rows."""

    FAMILY_TREE = "FamilyTree"
    FAMILY_MEMBER = "FamilyMember"
    SPOUSE_RELATIONSHIP = "SpouseRelationship"
    PASSING_RECORD = "PassingRecord"
    ACHIEVEMENT = "Achievement"


class Gender(str, Enum):
    """Member gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class MemberRelationship(str, Enum):
    """How a newly added member relates to an existing one."""

    PARENT = "parent"
    SPOUSE = "spouse"


class AccessLevel(str, Enum):
    """Access level an endpoint requires on a family tree or member."""

    READ = "read"
    OWNER_WRITE = "owner_write"
    PROFILE_WRITE = "profile_write"

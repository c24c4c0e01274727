"""Achievement schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from familytree.schemas.family_member import MemberRef


class AchievementTypeCreate(BaseModel):
    """Add an achievement category to a tree."""

    model_config = ConfigDict(str_strip_whitespace=True)

    type_name: str = Field(..., min_length=1, max_length=255)


class AchievementType(AchievementTypeCreate):
    """Achievement category as returned by the API."""

    id: int
    family_tree_id: int

    model_config = ConfigDict(from_attributes=True)


class AchievementCreate(BaseModel):
    """Record an achievement for a member."""

    model_config = ConfigDict(str_strip_whitespace=True)

    family_member_id: int
    achievement_type_id: int
    achieve_date: date
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class AchievementUpdate(BaseModel):
    """Edit an achievement. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    family_member_id: Optional[int] = None
    achievement_type_id: Optional[int] = None
    achieve_date: Optional[date] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class Achievement(BaseModel):
    """Achievement as returned by the API."""

    id: int
    family_member: MemberRef
    achievement_type: AchievementType
    achieve_date: date
    title: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

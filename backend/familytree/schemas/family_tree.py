"""Family tree schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from familytree.core.datetime_utils import ensure_utc


class FamilyTreeBase(BaseModel):
    """Fields shared by create and read."""

    family_name: str = Field(..., min_length=1, max_length=255, examples=["Nguyễn"])
    origin: Optional[str] = Field(None, max_length=255)
    establish_year: Optional[int] = Field(None, ge=0, le=9999)

    @field_validator("family_name")
    @classmethod
    def strip_family_name(cls, value: str) -> str:
        """Reject names that are only whitespace."""
        value = value.strip()
        if not value:
            raise ValueError("family_name must not be blank")
        return value


class FamilyTreeCreate(FamilyTreeBase):
    """Schema for creating a family tree."""


class FamilyTreeUpdate(BaseModel):
    """Schema for updating tree settings. Omitted fields are left unchanged."""

    family_name: Optional[str] = Field(None, min_length=1, max_length=255)
    origin: Optional[str] = Field(None, max_length=255)
    establish_year: Optional[int] = Field(None, ge=0, le=9999)

    @field_validator("family_name")
    @classmethod
    def reject_null_family_name(cls, value: Optional[str]) -> str:
        """The family name can be changed but not cleared."""
        if value is None or not value.strip():
            raise ValueError("family_name must not be blank")
        return value.strip()


class FamilyTree(FamilyTreeBase):
    """Family tree as returned by the API."""

    id: int
    tree_owner_id: int
    created_at: datetime
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "modified_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)

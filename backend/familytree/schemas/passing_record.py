"""Passing record schemas."""

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from familytree.schemas.family_member import MemberRef


class BuriedPlaceIn(BaseModel):
    """Burial place in a create/update payload."""

    location: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_range(self) -> "BuriedPlaceIn":
        """End date must not precede start date."""
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BuriedPlace(BuriedPlaceIn):
    """Burial place as returned by the API."""

    id: int

    model_config = ConfigDict(from_attributes=True)


def _clean_causes(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    cleaned = [c.strip() for c in value]
    if not cleaned or any(not c for c in cleaned):
        raise ValueError("causes_of_death must contain at least one non-empty cause")
    return cleaned


class PassingRecordCreate(BaseModel):
    """Create a passing record for a member."""

    family_member_id: int
    date_of_passing: date
    causes_of_death: List[str] = Field(..., min_length=1)
    buried_places: List[BuriedPlaceIn] = Field(default_factory=list)

    @field_validator("causes_of_death")
    @classmethod
    def clean_causes(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        """Strip causes and reject blank ones."""
        return _clean_causes(value)


class PassingRecordUpdate(BaseModel):
    """Edit a passing record. Given lists replace the stored ones."""

    date_of_passing: Optional[date] = None
    causes_of_death: Optional[List[str]] = None
    buried_places: Optional[List[BuriedPlaceIn]] = None

    @field_validator("causes_of_death")
    @classmethod
    def clean_causes(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        """Strip causes and reject blank ones."""
        return _clean_causes(value)


class PassingRecord(BaseModel):
    """Passing record as returned by the API."""

    id: int
    family_member: MemberRef
    date_of_passing: date
    causes_of_death: List[str]
    buried_places: List[BuriedPlace]

    model_config = ConfigDict(from_attributes=True)

    @field_validator("causes_of_death", mode="before")
    @classmethod
    def cause_names(cls, value: Any) -> Any:
        """Flatten ORM cause rows to their names."""
        return [getattr(c, "cause_name", c) for c in value]


class PassingRecordRef(BaseModel):
    """Short form used by the existence check."""

    id: int
    date_of_passing: date

    model_config = ConfigDict(from_attributes=True)


class PassingRecordCheck(BaseModel):
    """Whether a member already has a passing record."""

    has_record: bool
    passing_record: Optional[PassingRecordRef] = None

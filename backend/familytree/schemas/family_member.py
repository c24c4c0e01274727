"""Family member schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from familytree.core.datetime_utils import ensure_utc
from familytree.core.shared_models import Gender, MemberRelationship

STRUCTURAL_MEMBER_FIELDS = frozenset({"parent_id", "generation", "is_root_person"})


class MemberRef(BaseModel):
    """Minimal member reference embedded in other records."""

    id: int
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class DatedEntryBase(BaseModel):
    """A value that held over a date range."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_range(self) -> "DatedEntryBase":
        """End date must not precede start date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class OccupationIn(DatedEntryBase):
    """Occupation in a create/update payload."""

    job_title: str = Field(..., min_length=1, max_length=255)


class Occupation(OccupationIn):
    """Occupation as returned by the API."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class PlaceOfOriginIn(DatedEntryBase):
    """Place of origin in a create/update payload."""

    location: str = Field(..., min_length=1, max_length=255)


class PlaceOfOrigin(PlaceOfOriginIn):
    """Place of origin as returned by the API."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class FamilyMemberCreate(BaseModel):
    """Add a member to a tree, optionally linked to an existing member."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1, max_length=255)
    gender: Optional[Gender] = None
    birthday: Optional[date] = None
    address: Optional[str] = Field(None, max_length=500)
    related_member_id: Optional[int] = None
    relationship: Optional[MemberRelationship] = None
    relationship_date: Optional[date] = None
    places_of_origin: List[PlaceOfOriginIn] = Field(default_factory=list)
    occupations: List[OccupationIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_relationship(self) -> "FamilyMemberCreate":
        """A relationship needs a related member and the other way round."""
        if (self.relationship is None) != (self.related_member_id is None):
            raise ValueError("relationship and related_member_id must be given together")
        if self.relationship == MemberRelationship.SPOUSE and self.relationship_date is None:
            raise ValueError("relationship_date is required for a spouse relationship")
        return self


class FamilyMemberUpdate(BaseModel):
    """Editable member fields. Omitted fields are left unchanged.

    ``parent_id``, ``generation`` and ``is_root_person`` place the member in
    the tree; only tree owners may change them.
    """

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    gender: Optional[Gender] = None
    birthday: Optional[date] = None
    address: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[int] = None
    generation: Optional[str] = Field(None, max_length=16)
    is_root_person: Optional[bool] = None
    places_of_origin: Optional[List[PlaceOfOriginIn]] = None
    occupations: Optional[List[OccupationIn]] = None

    @field_validator("full_name")
    @classmethod
    def reject_null_full_name(cls, value: Optional[str]) -> str:
        """The name can be changed but not cleared."""
        if value is None or not value.strip():
            raise ValueError("full_name must not be blank")
        return value.strip()

    def structural_changes(self) -> set[str]:
        """Names of structural fields explicitly set in this payload."""
        return set(self.model_fields_set) & STRUCTURAL_MEMBER_FIELDS


class FamilyMemberSummary(BaseModel):
    """Member row in a tree listing."""

    id: int
    full_name: str
    gender: Optional[Gender] = None
    birthday: Optional[date] = None
    generation: Optional[str] = None
    parent_id: Optional[int] = None
    is_root_person: bool = False

    model_config = ConfigDict(from_attributes=True)


class FamilyMember(FamilyMemberSummary):
    """Member as returned by the API."""

    family_tree_id: int
    address: Optional[str] = None
    relationship_established_date: Optional[date] = None
    profile_picture_content_type: Optional[str] = Field(None, exclude=True)
    occupations: List[Occupation] = Field(default_factory=list)
    places_of_origin: List[PlaceOfOrigin] = Field(default_factory=list)
    created_at: datetime
    modified_at: datetime

    @field_validator("created_at", "modified_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_profile_picture(self) -> bool:
        """Whether a profile picture is stored."""
        return self.profile_picture_content_type is not None

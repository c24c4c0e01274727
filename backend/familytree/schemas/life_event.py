"""Marriage, divorce and birth record schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from familytree.schemas.family_member import MemberRef


class SpouseRelationship(BaseModel):
    """A marriage, open or closed by a divorce."""

    id: int
    family_member1: MemberRef
    family_member2: MemberRef
    marriage_date: date
    divorce_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class _CouplePayload(BaseModel):
    member1_id: int
    member2_id: int

    @model_validator(mode="after")
    def check_distinct(self) -> "_CouplePayload":
        """A member cannot be paired with themselves."""
        if self.member1_id == self.member2_id:
            raise ValueError("member1_id and member2_id must differ")
        return self

    @property
    def ordered_ids(self) -> tuple[int, int]:
        """Pair ids in storage order (smaller first)."""
        return min(self.member1_id, self.member2_id), max(self.member1_id, self.member2_id)


class MarriageCreate(_CouplePayload):
    """Record a marriage between two existing members."""

    marriage_date: date


class DivorceCreate(_CouplePayload):
    """Record a divorce for an existing marriage."""

    divorce_date: date


class BirthRecord(BaseModel):
    """Parent/child link with the recorded birth date."""

    child: MemberRef
    parent: MemberRef
    birth_date: Optional[date] = None


class BirthRecordUpdate(BaseModel):
    """New birth date for a child."""

    birth_date: date

"""Guest access-code schemas."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from familytree.core.datetime_utils import ensure_utc
from familytree.schemas.family_member import MemberRef


class GuestInviteCreate(BaseModel):
    """Request an access code for a member."""

    family_member_id: int


class GuestInviteIssued(BaseModel):
    """Issued (or re-used) access code."""

    success: bool = True
    access_code: str
    family_member: MemberRef
    expires_at: datetime
    message: str
    is_new: bool

    @field_validator("expires_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)


class GuestInvite(BaseModel):
    """Access code row in the owner's listing."""

    id: int
    access_code: str
    family_member: MemberRef
    created_at: datetime
    expires_at: datetime
    is_expired: bool

    @field_validator("created_at", "expires_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)

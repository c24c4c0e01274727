"""Session and guest redemption schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from familytree.core.datetime_utils import ensure_utc
from familytree.core.shared_models import SessionRole


class Session(BaseModel):
    """Resolved session as seen by the client."""

    role: SessionRole
    user_id: Optional[int] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    guest_member_id: Optional[int] = None
    guest_family_tree_id: Optional[int] = None
    guest_editor_id: Optional[int] = None
    expires_at: Optional[datetime] = None

    @field_validator("expires_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value) if value is not None else None


class GuestRedeemRequest(BaseModel):
    """Access code redemption payload.

    The code is optional at the schema level so a missing code gets the same
    localized 400 as a malformed one.
    """

    access_code: Optional[str] = None


class GuestInfo(BaseModel):
    """Who the guest is and which tree they were let into."""

    member_name: str
    family_tree_name: str
    family_tree_id: int


class GuestRedeemResult(BaseModel):
    """Successful redemption."""

    success: bool = True
    redirect_url: str
    guest_info: GuestInfo

"""Session domain types."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from familytree import schemas
from familytree.core.shared_models import SessionRole


@dataclass(frozen=True)
class ResolvedSession:
    """Identity behind a valid session token, re-read from the datastore."""

    role: SessionRole
    expires_at: datetime
    user: Optional[schemas.User] = None
    guest_member_id: Optional[int] = None
    guest_family_tree_id: Optional[int] = None
    guest_editor_id: Optional[int] = None

    def to_schema(self) -> schemas.Session:
        """Client-facing view of the session."""
        return schemas.Session(
            role=self.role,
            user_id=self.user.id if self.user else None,
            email=self.user.email if self.user else None,
            full_name=self.user.full_name if self.user else None,
            guest_member_id=self.guest_member_id,
            guest_family_tree_id=self.guest_family_tree_id,
            guest_editor_id=self.guest_editor_id,
            expires_at=self.expires_at,
        )


@dataclass(frozen=True)
class IssuedSession:
    """A freshly signed session token and when it stops working."""

    token: str
    expires_at: datetime

"""HTTP API request context.

Carries the resolved session (owner or guest), the request id and a contextual
logger. Only the API layer creates these via deps.get_context().
"""

from dataclasses import dataclass, field
from typing import Optional

from familytree import schemas
from familytree.core.logging import ContextualLogger
from familytree.core.shared_models import SessionRole


@dataclass
class ApiContext:
    """Full HTTP request context.

    Owners carry ``user``. Guests carry the ids of the member, tree and guest
    editor their access code was bound to.
    """

    role: SessionRole
    request_id: str = ""
    user: Optional[schemas.User] = None
    guest_member_id: Optional[int] = None
    guest_family_tree_id: Optional[int] = None
    guest_editor_id: Optional[int] = None

    logger: ContextualLogger = field(default=None, kw_only=True, repr=False)

    def __post_init__(self):
        """Auto-derive logger from the session identity if not provided."""
        if self.logger is None:
            from familytree.core.logging import logger as base_logger

            self.logger = base_logger.with_context(
                request_id=self.request_id or None,
                role=self.role.value,
                user_id=self.user_id,
                guest_editor_id=self.guest_editor_id,
            )

    @property
    def is_owner(self) -> bool:
        """Whether the caller is a signed-in owner."""
        return self.role == SessionRole.OWNER

    @property
    def is_guest(self) -> bool:
        """Whether the caller redeemed an access code."""
        return self.role == SessionRole.GUEST

    @property
    def user_id(self) -> Optional[int]:
        """User ID if available."""
        return self.user.id if self.user else None

    def __str__(self) -> str:
        """String representation for logging."""
        if self.is_guest:
            return (
                f"ApiContext(request_id={self.request_id[:8]}..., role=guest, "
                f"guest_editor={self.guest_editor_id}, tree={self.guest_family_tree_id})"
            )
        return f"ApiContext(request_id={self.request_id[:8]}..., role=owner, user={self.user_id})"

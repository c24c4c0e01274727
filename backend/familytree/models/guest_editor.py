"""Guest editor model: a time-limited access code bound to one member."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.core.datetime_utils import utc_now
from familytree.models._base import Base
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class GuestEditor(Base):
    """Access grant for one (tree, member) pair.

    One row per pair. Re-issuing after expiry rotates ``access_code`` and
    ``created_at`` in place.
    """

    __tablename__ = "guest_editor"

    family_tree_id: Mapped[int] = mapped_column(
        ForeignKey("family_tree.id", ondelete="CASCADE"), nullable=False, index=True
    )
    family_member_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False
    )
    access_code: Mapped[str] = mapped_column(String(45), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    family_tree: Mapped[FamilyTree] = relationship(FamilyTree, lazy="joined")
    family_member: Mapped[FamilyMember] = relationship(FamilyMember, lazy="joined")

    __table_args__ = (
        UniqueConstraint("family_tree_id", "family_member_id", name="uq_guest_editor_member"),
    )

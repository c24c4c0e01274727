"""Family tree model."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base, TimestampMixin

if TYPE_CHECKING:
    from familytree.models.family_member import FamilyMember
    from familytree.models.user import TreeOwner


class FamilyTree(Base, TimestampMixin):
    """Root aggregate for all genealogical records of one family."""

    __tablename__ = "family_tree"

    family_name: Mapped[str] = mapped_column(String(255), nullable=False)
    origin: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    establish_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tree_owner_id: Mapped[int] = mapped_column(
        ForeignKey("tree_owner.id", ondelete="CASCADE"), nullable=False, index=True
    )

    tree_owner: Mapped["TreeOwner"] = relationship(
        "TreeOwner", back_populates="family_trees", lazy="noload"
    )
    members: Mapped[List["FamilyMember"]] = relationship(
        "FamilyMember",
        back_populates="family_tree",
        lazy="noload",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

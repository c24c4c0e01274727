"""User and tree owner models."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base, TimestampMixin

if TYPE_CHECKING:
    from familytree.models.family_tree import FamilyTree


class User(Base, TimestampMixin):
    """Registered account. Owners sign in with email and password."""

    __tablename__ = "user"

    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    tree_owner: Mapped[Optional["TreeOwner"]] = relationship(
        "TreeOwner",
        back_populates="user",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TreeOwner(Base, TimestampMixin):
    """Owner profile linking a user to the trees they control."""

    __tablename__ = "tree_owner"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="tree_owner", lazy="noload")
    family_trees: Mapped[List["FamilyTree"]] = relationship(
        "FamilyTree",
        back_populates="tree_owner",
        lazy="noload",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

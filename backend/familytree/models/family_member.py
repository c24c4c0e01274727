"""Family member model with occupations and places of origin."""

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Date, ForeignKey, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base, TimestampMixin

if TYPE_CHECKING:
    from familytree.models.family_tree import FamilyTree


class FamilyMember(Base, TimestampMixin):
    """A person in a family tree."""

    __tablename__ = "family_member"

    family_tree_id: Mapped[int] = mapped_column(
        ForeignKey("family_tree.id", ondelete="CASCADE"), nullable=False, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    birthday: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    generation: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    parent_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("family_member.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_root_person: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Date the parent link was recorded; doubles as the birth record date.
    relationship_established_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    profile_picture: Mapped[Optional[bytes]] = mapped_column(
        LargeBinary, nullable=True, deferred=True
    )
    profile_picture_content_type: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True
    )

    family_tree: Mapped["FamilyTree"] = relationship(
        "FamilyTree", back_populates="members", lazy="noload"
    )
    parent: Mapped[Optional["FamilyMember"]] = relationship(
        "FamilyMember", remote_side="FamilyMember.id", lazy="noload"
    )
    occupations: Mapped[List["Occupation"]] = relationship(
        "Occupation",
        back_populates="family_member",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Occupation.id",
    )
    places_of_origin: Mapped[List["PlaceOfOrigin"]] = relationship(
        "PlaceOfOrigin",
        back_populates="family_member",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PlaceOfOrigin.id",
    )


class Occupation(Base):
    """A job held by a member over a date range."""

    __tablename__ = "occupation"

    family_member_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    family_member: Mapped["FamilyMember"] = relationship(
        "FamilyMember", back_populates="occupations", lazy="noload"
    )


class PlaceOfOrigin(Base):
    """A place a member lived in or comes from."""

    __tablename__ = "place_of_origin"

    family_member_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, index=True
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    family_member: Mapped["FamilyMember"] = relationship(
        "FamilyMember", back_populates="places_of_origin", lazy="noload"
    )

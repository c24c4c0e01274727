"""Spouse relationship model."""

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base
from familytree.models.family_member import FamilyMember


class SpouseRelationship(Base):
    """Marriage between two members; a divorce date closes it.

    The pair is stored ordered, so ``family_member1_id < family_member2_id``
    and each couple has at most one row.
    """

    __tablename__ = "spouse_relationship"

    family_member1_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, index=True
    )
    family_member2_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, index=True
    )
    marriage_date: Mapped[date] = mapped_column(Date, nullable=False)
    divorce_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    family_member1: Mapped[FamilyMember] = relationship(
        FamilyMember, foreign_keys=[family_member1_id], lazy="joined"
    )
    family_member2: Mapped[FamilyMember] = relationship(
        FamilyMember, foreign_keys=[family_member2_id], lazy="joined"
    )

    __table_args__ = (
        UniqueConstraint("family_member1_id", "family_member2_id", name="uq_spouse_pair"),
        CheckConstraint("family_member1_id < family_member2_id", name="ck_spouse_pair_order"),
    )

"""Achievement and achievement type models."""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base
from familytree.models.family_member import FamilyMember


class AchievementType(Base):
    """Tree-specific category of achievement, e.g. "Education"."""

    __tablename__ = "achievement_type"

    family_tree_id: Mapped[int] = mapped_column(
        ForeignKey("family_tree.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type_name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("family_tree_id", "type_name", name="uq_achievement_type_name"),
    )


class Achievement(Base):
    """Something a member accomplished on a given date."""

    __tablename__ = "achievement"

    family_member_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, index=True
    )
    achievement_type_id: Mapped[int] = mapped_column(
        ForeignKey("achievement_type.id", ondelete="CASCADE"), nullable=False, index=True
    )
    achieve_date: Mapped[date] = mapped_column(Date, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    family_member: Mapped[FamilyMember] = relationship(FamilyMember, lazy="joined")
    achievement_type: Mapped[AchievementType] = relationship(AchievementType, lazy="joined")

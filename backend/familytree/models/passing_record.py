"""Passing record model with causes of death and burial places."""

from datetime import date
from typing import List, Optional

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familytree.models._base import Base
from familytree.models.family_member import FamilyMember


class PassingRecord(Base):
    """Death record of a member. At most one per member."""

    __tablename__ = "passing_record"

    family_member_id: Mapped[int] = mapped_column(
        ForeignKey("family_member.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    date_of_passing: Mapped[date] = mapped_column(Date, nullable=False)

    family_member: Mapped[FamilyMember] = relationship(FamilyMember, lazy="joined")
    causes_of_death: Mapped[List["CauseOfDeath"]] = relationship(
        "CauseOfDeath",
        back_populates="passing_record",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CauseOfDeath.id",
    )
    buried_places: Mapped[List["BuriedPlace"]] = relationship(
        "BuriedPlace",
        back_populates="passing_record",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BuriedPlace.id",
    )


class CauseOfDeath(Base):
    """One cause listed on a passing record."""

    __tablename__ = "cause_of_death"

    passing_record_id: Mapped[int] = mapped_column(
        ForeignKey("passing_record.id", ondelete="CASCADE"), nullable=False, index=True
    )
    cause_name: Mapped[str] = mapped_column(String(255), nullable=False)

    passing_record: Mapped[PassingRecord] = relationship(
        PassingRecord, back_populates="causes_of_death", lazy="noload"
    )


class BuriedPlace(Base):
    """Burial location, with the period the remains were kept there."""

    __tablename__ = "buried_place"

    passing_record_id: Mapped[int] = mapped_column(
        ForeignKey("passing_record.id", ondelete="CASCADE"), nullable=False, index=True
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    passing_record: Mapped[PassingRecord] = relationship(
        PassingRecord, back_populates="buried_places", lazy="noload"
    )

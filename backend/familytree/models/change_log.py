"""Append-only change log."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from familytree.core.datetime_utils import utc_now
from familytree.models._base import Base


class ChangeLog(Base):
    """Audit row for one mutation. Rows are never updated or deleted."""

    __tablename__ = "change_log"

    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[str] = mapped_column(String(16), nullable=False)
    family_tree_id: Mapped[int] = mapped_column(
        ForeignKey("family_tree.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    # Set instead of user_id when a guest made the change.
    guest_editor_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    old_values: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    new_values: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (
        Index("idx_change_log_tree_created", "family_tree_id", "created_at"),
        Index("idx_change_log_entity", "entity_type", "entity_id"),
    )

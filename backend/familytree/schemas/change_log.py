"""Change log schema."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from familytree.core.datetime_utils import ensure_utc


class ChangeLog(BaseModel):
    """One audit row."""

    id: int
    entity_type: str
    entity_id: int
    action: str
    family_tree_id: int
    user_id: Optional[int] = None
    guest_editor_id: Optional[int] = None
    old_values: Optional[dict[str, Any]] = None
    new_values: Optional[dict[str, Any]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)

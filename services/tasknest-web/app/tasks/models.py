"""
TASKNEST Web - Todo Models

Internal todo model mirroring a row of the remote todos table.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Todo:
    """Todo row owned by one identity."""

    id: str
    text: str
    completed: bool
    user_id: str
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert todo to a table row."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "user_id": self.user_id,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Todo":
        """Create todo from a table row."""
        return cls(
            id=str(data["id"]),
            text=data["text"],
            completed=bool(data.get("completed", False)),
            user_id=str(data["user_id"]),
            created_at=data.get("created_at"),
        )

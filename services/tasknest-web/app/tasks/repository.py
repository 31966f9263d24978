"""
TASKNEST Web - Todo Repository

Data access for the remote todos table.
Row ownership is enforced by the remote service; listing also filters by owner.
"""

from typing import Optional

from app.config import settings
from app.backend.interface import RemoteBackendInterface
from app.tasks.models import Todo


class TodoRepository:
    """Todo rows stored in the remote todos table."""

    def __init__(self, backend: RemoteBackendInterface, table: Optional[str] = None):
        self.backend = backend
        self.table = table or settings.TODOS_TABLE

    async def list_by_owner(self, owner_id: str) -> list[Todo]:
        rows = await self.backend.select(
            self.table,
            filters={"user_id": owner_id},
            order_by="created_at",
        )
        return [Todo.from_dict(row) for row in rows]

    async def create(self, owner_id: str, text: str) -> Todo:
        row = await self.backend.insert(
            self.table,
            {"text": text, "completed": False, "user_id": owner_id},
        )
        return Todo.from_dict(row)

    async def update(self, todo_id: str, updates: dict) -> Optional[Todo]:
        rows = await self.backend.update(self.table, {"id": todo_id}, updates)
        if not rows:
            return None
        return Todo.from_dict(rows[0])

    async def delete(self, todo_id: str) -> None:
        await self.backend.delete(self.table, {"id": todo_id})

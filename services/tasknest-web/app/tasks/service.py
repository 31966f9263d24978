"""
TASKNEST Web - Todo List Service

The signed-in user's todo list: a local copy of their rows kept in step
with create/update/delete calls against the remote table.

Remote errors are logged and the local list is left as it was; no error
state is published for todo operations.
"""

import logging
from dataclasses import replace
from typing import Optional

from app.backend.errors import RemoteServiceError
from app.tasks.models import Todo
from app.tasks.repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoList:
    """Local todo list for one owner."""

    def __init__(self, repository: TodoRepository, owner_id: str):
        self.repository = repository
        self.owner_id = owner_id
        self.items: list[Todo] = []

    def get(self, todo_id: str) -> Optional[Todo]:
        for todo in self.items:
            if todo.id == todo_id:
                return todo
        return None

    async def refresh(self) -> list[Todo]:
        """Reload the list from the remote table."""
        try:
            self.items = await self.repository.list_by_owner(self.owner_id)
        except RemoteServiceError as e:
            logger.error(f"Error fetching todos for {self.owner_id}: {e.message}")
        return self.items

    async def add(self, text: str) -> Optional[Todo]:
        text = text.strip()
        if not text:
            return None

        try:
            todo = await self.repository.create(self.owner_id, text)
        except RemoteServiceError as e:
            logger.error(f"Error adding todo: {e.message}")
            return None

        self.items.append(todo)
        return todo

    async def toggle(self, todo_id: str) -> Optional[Todo]:
        """Flip `completed` for one todo with a single update call."""
        todo = self.get(todo_id)
        if todo is None:
            logger.warning(f"Toggle requested for unknown todo {todo_id}")
            return None

        completed = not todo.completed
        try:
            await self.repository.update(todo_id, {"completed": completed})
        except RemoteServiceError as e:
            logger.error(f"Error updating todo {todo_id}: {e.message}")
            return None

        return self._replace(replace(todo, completed=completed))

    async def edit(self, todo_id: str, text: str) -> Optional[Todo]:
        text = text.strip()
        if not text:
            return None

        todo = self.get(todo_id)
        if todo is None:
            logger.warning(f"Edit requested for unknown todo {todo_id}")
            return None

        try:
            await self.repository.update(todo_id, {"text": text})
        except RemoteServiceError as e:
            logger.error(f"Error updating todo {todo_id}: {e.message}")
            return None

        return self._replace(replace(todo, text=text))

    async def delete(self, todo_id: str) -> bool:
        if self.get(todo_id) is None:
            logger.warning(f"Delete requested for unknown todo {todo_id}")
            return False

        try:
            await self.repository.delete(todo_id)
        except RemoteServiceError as e:
            logger.error(f"Error deleting todo {todo_id}: {e.message}")
            return False

        self.items = [todo for todo in self.items if todo.id != todo_id]
        return True

    def _replace(self, updated: Todo) -> Todo:
        self.items = [updated if todo.id == updated.id else todo for todo in self.items]
        return updated

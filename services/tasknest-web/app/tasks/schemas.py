"""
TASKNEST Web - Todo Schemas

Pydantic models for todo API requests and responses.
"""

from typing import Optional, List

from pydantic import BaseModel, Field

from app.tasks.models import Todo


class TodoCreateRequest(BaseModel):
    """Request model for adding a todo. Blank text is ignored."""

    text: str = Field(max_length=500, description="Todo text")


class TodoUpdateRequest(BaseModel):
    """Request model for editing a todo's text. Blank text is ignored."""

    text: str = Field(max_length=500, description="New todo text")


class TodoResponse(BaseModel):
    """Response model for a single todo."""

    id: str = Field(description="Todo ID")
    text: str = Field(description="Todo text")
    completed: bool = Field(description="Whether the todo is done")
    created_at: Optional[str] = Field(default=None, description="Creation timestamp")

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            text=todo.text,
            completed=todo.completed,
            created_at=todo.created_at,
        )


class TodoListResponse(BaseModel):
    """Response model for the todo list."""

    todos: List[TodoResponse] = Field(description="List of todos")
    total: int = Field(description="Total count of todos")

    @classmethod
    def from_todos(cls, todos: List[Todo]) -> "TodoListResponse":
        return cls(
            todos=[TodoResponse.from_todo(todo) for todo in todos],
            total=len(todos),
        )

"""
TASKNEST Web - Todo Router

CRUD endpoints for the signed-in user's todo list.
All endpoints require an authenticated session and return the resulting list.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.auth.dependencies import CurrentIdentity, SessionDep
from app.tasks.repository import TodoRepository
from app.tasks.schemas import TodoCreateRequest, TodoUpdateRequest, TodoListResponse
from app.tasks.service import TodoList


router = APIRouter(prefix="/todos", tags=["Todos"])


def get_todo_lists(request: Request) -> dict[str, TodoList]:
    """Dependency to get the per-owner todo lists kept for this app."""
    return request.app.state.todo_lists


async def get_todo_list(
    identity: CurrentIdentity,
    controller: SessionDep,
    todo_lists: Annotated[dict[str, TodoList], Depends(get_todo_lists)],
) -> TodoList:
    """Dependency to get the current user's todo list, loading it on first use."""
    todo_list = todo_lists.get(identity.id)
    if todo_list is None:
        todo_list = TodoList(TodoRepository(controller.backend), owner_id=identity.id)
        await todo_list.refresh()
        todo_lists[identity.id] = todo_list
    return todo_list


TodoListDep = Annotated[TodoList, Depends(get_todo_list)]


@router.get(
    "",
    response_model=TodoListResponse,
    summary="List todos",
)
async def list_todos(todo_list: TodoListDep) -> TodoListResponse:
    """Reload and return the current user's todos, oldest first."""
    return TodoListResponse.from_todos(await todo_list.refresh())


@router.post(
    "",
    response_model=TodoListResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a todo",
)
async def add_todo(request: TodoCreateRequest, todo_list: TodoListDep) -> TodoListResponse:
    await todo_list.add(request.text)
    return TodoListResponse.from_todos(todo_list.items)


@router.patch(
    "/{todo_id}",
    response_model=TodoListResponse,
    summary="Edit a todo's text",
)
async def edit_todo(
    todo_id: str,
    request: TodoUpdateRequest,
    todo_list: TodoListDep,
) -> TodoListResponse:
    await todo_list.edit(todo_id, request.text)
    return TodoListResponse.from_todos(todo_list.items)


@router.post(
    "/{todo_id}/toggle",
    response_model=TodoListResponse,
    summary="Toggle a todo's completion",
)
async def toggle_todo(todo_id: str, todo_list: TodoListDep) -> TodoListResponse:
    await todo_list.toggle(todo_id)
    return TodoListResponse.from_todos(todo_list.items)


@router.delete(
    "/{todo_id}",
    response_model=TodoListResponse,
    summary="Delete a todo",
)
async def delete_todo(todo_id: str, todo_list: TodoListDep) -> TodoListResponse:
    await todo_list.delete(todo_id)
    return TodoListResponse.from_todos(todo_list.items)

"""
TASKNEST Web - Todos Module

The signed-in user's todo list over the remote todos table.
"""

from app.tasks.router import router as tasks_router

__all__ = ["tasks_router"]

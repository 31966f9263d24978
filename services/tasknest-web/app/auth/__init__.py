"""
TASKNEST Web - Authentication Module

Session controller, error classification and the login form endpoints.
"""

from app.auth.router import router as auth_router
from app.auth.dependencies import get_current_identity, get_session_controller

__all__ = ["auth_router", "get_current_identity", "get_session_controller"]

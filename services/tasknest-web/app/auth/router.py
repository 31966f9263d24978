"""
TASKNEST Web - Authentication Router

Endpoints backing the login / sign-up form and the sign-out button.
"""

from fastapi import APIRouter, HTTPException, status

from app.auth.dependencies import SessionDep
from app.auth.schemas import CredentialsRequest, SessionResponse
from app.auth.session import SessionController


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _session_response(controller: SessionController) -> SessionResponse:
    return SessionResponse.from_snapshot(controller.snapshot(), controller.location)


def _validate(request: CredentialsRequest) -> None:
    errors = request.form_errors()
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=errors,
        )


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Get current-user state",
)
async def get_session(controller: SessionDep) -> SessionResponse:
    return _session_response(controller)


@router.post(
    "/signup",
    response_model=SessionResponse,
    summary="Create an account",
)
async def sign_up(request: CredentialsRequest, controller: SessionDep) -> SessionResponse:
    """
    Create an account with email and password.

    - Email must look like name@domain.tld
    - Password must be at least PASSWORD_MIN_LENGTH characters

    Remote failures are reported in the `error` field, not as HTTP errors.
    """
    _validate(request)
    await controller.sign_up(request.email, request.password)
    return _session_response(controller)


@router.post(
    "/login",
    response_model=SessionResponse,
    summary="Sign in",
)
async def login(request: CredentialsRequest, controller: SessionDep) -> SessionResponse:
    """
    Sign in with email and password.

    Remote failures are reported in the `error` field, not as HTTP errors.
    """
    _validate(request)
    await controller.login(request.email, request.password, request.remember_me)
    return _session_response(controller)


@router.post(
    "/logout",
    response_model=SessionResponse,
    summary="Sign out",
)
async def logout(controller: SessionDep) -> SessionResponse:
    await controller.logout()
    return _session_response(controller)

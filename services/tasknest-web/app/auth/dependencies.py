from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from app.auth.session import SessionController
from app.backend.models import Identity


def get_session_controller(request: Request) -> SessionController:
    """Dependency to get the controller created in the app lifespan."""
    controller = getattr(request.app.state, "session_controller", None)
    if controller is None:
        raise RuntimeError("Session controller not started. Run the app lifespan first.")
    return controller


SessionDep = Annotated[SessionController, Depends(get_session_controller)]


async def get_current_identity(controller: SessionDep) -> Identity:
    if controller.identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
        )
    return controller.identity


# Type alias for cleaner dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]

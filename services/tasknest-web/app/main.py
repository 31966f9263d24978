"""
TASKNEST Web - Main Application

Backend for the TaskNest browser pages: the login / sign-up form and the
todo list. Authentication and storage are delegated to the remote service.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.auth import auth_router
from app.auth.session import AuthSnapshot, SessionController
from app.backend import InMemoryBackend, RemoteBackendInterface
from app.backend.supabase_backend import SupabaseBackend
from app.tasks import tasks_router
from app.security import validate_backend_config

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


async def build_backend() -> RemoteBackendInterface:
    """Supabase when credentials are configured, in-memory otherwise."""
    if settings.supabase_configured:
        return await SupabaseBackend.connect(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)

    logger.warning("Supabase credentials not found in environment; using in-memory backend")
    return InMemoryBackend()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: Validate backend configuration
    validate_backend_config()
    backend = await build_backend()

    app.state.todo_lists = {}

    def drop_todo_lists(snapshot: AuthSnapshot) -> None:
        if not snapshot.is_authenticated:
            app.state.todo_lists.clear()

    # Startup: Restore the session and follow remote session changes
    controller = SessionController(
        backend,
        navigate=lambda location: logger.info("Navigate to %s", location),
    )
    controller.subscribe(drop_todo_lists)
    app.state.session_controller = controller

    async with controller:
        yield

    # Shutdown: subscription released by the controller context
    app.state.session_controller = None


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Todo list with email/password accounts",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS configuration - allow the browser pages' origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and version information.
    Used by Docker health checks and load balancers.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


app.include_router(auth_router)
app.include_router(tasks_router)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

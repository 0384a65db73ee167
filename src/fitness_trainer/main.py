"""FastAPI application for the Fitness Trainer API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_database
from .api.exception_handlers import register_exception_handlers
from .api.middleware.rate_limit import limiter
from .api.middleware.security_headers import SecurityHeadersMiddleware
from .api.routes import auth, users, workouts
from .config import get_settings
from .utils.log_sanitizer import install_log_sanitizer

# Must run before any request is logged
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration and shutdown."""
    settings = get_settings()
    logger.info(f"Starting Fitness Trainer API v{__version__}")

    if settings.uses_dev_secret:
        logger.warning(
            "JWT_SECRET_KEY is the built-in development key. "
            "Set a unique secret before exposing this server."
        )

    database = app.dependency_overrides.get(get_database, get_database)()
    logger.info(f"Database: {database.db_path}")

    yield

    logger.info("Shutting down Fitness Trainer API")


app = FastAPI(
    title="Fitness Trainer API",
    description="Workout tracking with per-user ownership",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

# slowapi looks the limiter up on app.state
app.state.limiter = limiter

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)
app.add_middleware(
    SecurityHeadersMiddleware,
    content_security_policy=settings.security_csp,
    enable_hsts=settings.security_enable_hsts,
)

register_exception_handlers(app)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(workouts.router, prefix="/api/workouts", tags=["workouts"])


@app.get("/")
async def root():
    """Service name and version."""
    return {
        "name": "Fitness Trainer API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "healthy"}


def run(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn, defaulting to the configured host and port."""
    import uvicorn

    from .utils.log_sanitizer import configure_logging

    configure_logging(settings.log_level)
    uvicorn.run(app, host=host or settings.api_host, port=port or settings.api_port)


if __name__ == "__main__":
    run()

"""FastAPI directory service for mentionbox.

Serves the directory file in the provider wire shape so that
``HttpDirectoryProvider`` clients can fetch it.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from mentionbox import __version__
from mentionbox.config import get_settings
from mentionbox.directory import DirectoryLoadError, load_directory, sort_directory

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.value),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    current = get_settings()
    logger.info("Starting mentionbox directory service v%s", __version__)
    logger.info("Directory path: %s", current.directory_path)

    try:
        app.state.directory = sort_directory(load_directory(current.directory_path))
        app.state.directory_loaded = True
    except DirectoryLoadError as e:
        logger.error("Failed to load directory: %s", e)
        app.state.directory = None
        app.state.directory_loaded = False

    yield

    logger.info("Shutting down mentionbox directory service")


app = FastAPI(
    title="mentionbox directory",
    description="Directory of users that can be referenced with @mentions",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/", response_class=JSONResponse)
async def root() -> dict:
    """API metadata endpoint."""
    return {
        "name": "mentionbox",
        "version": __version__,
        "description": "Directory of users referenceable with @mentions",
        "trigger": get_settings().trigger,
    }


@app.get("/health/live", response_class=JSONResponse)
async def liveness() -> dict:
    """Liveness check endpoint."""
    return {"status": "ok"}


@app.get("/health/ready", response_class=JSONResponse)
async def readiness() -> JSONResponse:
    """Readiness check endpoint."""
    if not getattr(app.state, "directory_loaded", False):
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "reason": "directory not loaded"},
        )
    return JSONResponse(content={"status": "ok", "user_count": len(app.state.directory)})


@app.get("/users", response_class=JSONResponse)
async def list_users() -> JSONResponse:
    """Return the directory as ``{username, name, avatar_url}`` records."""
    directory = getattr(app.state, "directory", None)
    if directory is None:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "message": "Directory not loaded"},
        )
    return JSONResponse(content=[entry.to_wire() for entry in directory])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mentionbox.main:app",
        host=settings.host,
        port=settings.port,
    )

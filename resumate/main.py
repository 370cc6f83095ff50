"""Application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from resumate import __version__
from resumate.api.container import get_container
from resumate.api.dependencies import limiter
from resumate.api.routes.jobs import router as jobs_router
from resumate.api.routes.profile import router as profile_router
from resumate.api.routes.workflow import router as workflow_router
from resumate.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container):
    """Apply logging from container config (stdout + optional file)."""
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: setup logging, load the stored profile. Shutdown: close the backend."""
    container = get_container()
    _apply_logging_config(container)
    log.info(
        "startup_begin",
        llm_provider=container.config.llm.provider,
        store_path=container.config.persistence.store_path,
    )
    controller = container.workflow_controller
    log.info("profile_loaded", facts=len(controller.profile.facts))
    if not await container.backend.is_available():
        log.warning("backend_unavailable", llm_provider=container.config.llm.provider)
    log.info("startup_complete")
    yield
    log.info("shutdown_begin")
    if hasattr(container.backend, "close"):
        try:
            await container.backend.close()
        except Exception:  # noqa: BLE001
            log.debug("backend_close_error", exc_info=True)
    log.info("shutdown_complete")


app = FastAPI(
    title="ResuMate",
    version=__version__,
    description="Resume tailoring workflow: gap analysis, clarification, documents and job discovery",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_container().config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(workflow_router)
app.include_router(profile_router)
app.include_router(jobs_router)


@app.get("/health")
@limiter.limit("100/minute")
async def health(request: Request) -> dict:
    """Health check with backend availability."""
    container = get_container()
    return {
        "status": "ok",
        "service": "resumate",
        "llm_provider": container.config.llm.provider,
        "llm_available": await container.backend.is_available(),
        "step": container.workflow_controller.step.value,
    }

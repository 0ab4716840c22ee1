"""
Reno API - Main FastAPI Application Entry Point

AI renovation planning assistant for multifamily properties.
Wires the plan and dashboard routers, CORS and the error mapping together.

Start locally:
    uvicorn reno.api.main:app --host 0.0.0.0 --port 8000
"""

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reno.api.routes_dashboard import router as dashboard_router
from reno.api.routes_plan import router as plan_router
from reno.config import CORS_ORIGINS, IMAGE_MODEL, LOG_LEVEL, PLAN_MODEL
from reno.errors import (
    AssetGenerationError,
    CredentialError,
    GenerationError,
    RenoError,
    ServiceError,
    SessionNotFoundError,
    StaleResultError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def setup_logging(level: str = LOG_LEVEL) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s")
    )
    root.handlers = [handler]

    for name in ["uvicorn.access", "httpcore", "httpx"]:
        logging.getLogger(name).setLevel(logging.WARNING)


setup_logging()

app = FastAPI(
    title="Reno API",
    description="AI renovation planning for multifamily properties",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

# (status code, user-facing remediation) per error family; most specific first.
_ERROR_RESPONSES: list[tuple[type[RenoError], int, str]] = [
    (ValidationError, 400, "Please check the submitted data."),
    (SessionNotFoundError, 404, "Session not found. Please start a new project."),
    (StaleResultError, 409, "This result is out of date and was discarded."),
    (CredentialError, 401, "Please select a valid API key."),
    (ServiceError, 502, "Failed to reach the AI service. Please check your API key."),
    (GenerationError, 502, "Failed to generate plan. Please try again."),
    (AssetGenerationError, 502, "Could not generate image. Please try again."),
]


@app.exception_handler(RenoError)
async def reno_exception_handler(request: Request, exc: RenoError):
    """Map domain errors to structured JSON responses."""
    status_code, hint = 500, "An unexpected error occurred."
    for error_type, code, message in _ERROR_RESPONSES:
        if isinstance(exc, error_type):
            status_code, hint = code, message
            break

    logger.warning(
        "[api] %s (%s): %s | Path: %s",
        type(exc).__name__, exc.kind, exc.message, request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "kind": exc.kind,
            "message": exc.message,
            "hint": hint,
            "detail": exc.detail,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Last-resort handler: anything unexpected becomes a 500 with the same body shape."""
    logger.error(
        "[api] ERROR %s: %s | Path: %s",
        type(exc).__name__, exc, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": type(exc).__name__,
            "kind": "internal",
            "message": "An unexpected error occurred.",
            "hint": None,
            "detail": None,
        },
    )


# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(plan_router)
app.include_router(dashboard_router)


# ---------------------------------------------------------------------------
# Root & health-check endpoints
# ---------------------------------------------------------------------------
@app.get("/")
async def root():
    """Service name and version."""
    return {
        "name": "Reno API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "plan_model": PLAN_MODEL, "image_model": IMAGE_MODEL}


# ---------------------------------------------------------------------------
# Convenience: run directly with `python -m reno.api.main`
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("reno.api.main:app", host="0.0.0.0", port=8000, reload=True)

"""
StudyMapper — Mind Map Service
===============================
FastAPI entry point.
  • Global exception handler — never crashes, always returns JSON
  • /api/upload  — PDF/DOC/DOCX/PPT/PPTX/TXT upload → mind map
  • /api/analyze — pasted notes → mind map
  • /api/layout  — mind map → radial canvas layout
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import error_response
from app.schemas.common import ErrorResponse, HealthResponse
from app.api.v1.endpoints import mindmap, render

SERVICE_NAME = "StudyMapper"
VERSION = "1.0.0"

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)

# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="StudyMapper — Mind Map Service",
    description=(
        "Turns study material into visual mind maps.\n"
        "Upload a document or paste notes → receive a central idea, branches and sub-branches."
    ),
    version=VERSION,
    responses={500: {"model": ErrorResponse}},
)


# ── Global Exception Handler ────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: every unhandled exception returns a clean JSON envelope."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return error_response(500, str(exc) or "Internal server error", exc)


# ── Validation Errors ───────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same envelope as every other failure."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid request ({location}): {first.get('msg', 'validation failed')}"
    logger.warning(f"[VALIDATION] {request.url.path}: {message}")
    return error_response(422, message, exc)


# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health Check ─────────────────────────────────────────────────────────────
@app.get("/api/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    return HealthResponse(status="ok", service=SERVICE_NAME, version=VERSION)


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(mindmap.router, prefix="/api")
app.include_router(render.router, prefix="/api")

logger.info(f"[INIT] {SERVICE_NAME} v{VERSION} ready ({settings.ENVIRONMENT})")

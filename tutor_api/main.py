"""
tutor_api/main.py

FastAPI application entry point.

Responsibilities:
  - Create the FastAPI app with metadata from config
  - Allow cross-origin requests from the browser client
  - Register all API routers
  - Convert request-body validation failures to 400 and add a global
    exception handler for uncaught AppBaseException
  - Expose a /health endpoint for liveness probes
  - Serve stored uploads and the static client bundle
"""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from tutor_api.api.solver_controller import router as solver_router
from tutor_api.api.tutor_controller import router as tutor_router
from tutor_api.api.upload_controller import router as upload_router
from tutor_api.core.config import settings
from tutor_api.core.exceptions import AppBaseException, InvalidRequestError
from tutor_api.core.logger import get_logger

logger = get_logger(__name__)

# ── App instance ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "AI tutor for mechanical engineering students: chat, problem solving, "
        "and explanations of uploaded documents, images, audio and video."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ────────────────────────────────────────────────────────────────────

app.include_router(tutor_router)
app.include_router(solver_router)
app.include_router(upload_router)

# ── Exception handlers ─────────────────────────────────────────────────────────

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or malformed body fields are a client error: { "error", "details" }."""
    details = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning("Invalid request body on %s: %s", request.url.path, details)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body.", "details": details},
    )


@app.exception_handler(AppBaseException)
async def app_exception_handler(request: Request, exc: AppBaseException) -> JSONResponse:
    """
    Safety-net for any AppBaseException that escapes controller-level handling.
    Returns the standard error shape: { "error": "..." }
    """
    if isinstance(exc, InvalidRequestError):
        logger.warning("Rejected request on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})
    logger.exception("Unhandled application error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ── Health endpoint ────────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"], summary="Liveness probe")
async def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok", "version": settings.app_version}


# ── Static files ───────────────────────────────────────────────────────────────
# Registered last so the catch-all never shadows an API route.

Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

app.mount(
    "/uploads",
    StaticFiles(directory=settings.upload_dir),
    name="uploads",
)


@app.get("/{full_path:path}", include_in_schema=False)
async def client_bundle(full_path: str):
    """
    Serve a file from the client bundle, falling back to index.html so the
    browser client can own its routes.
    """
    client_dir = Path(settings.client_dir).resolve()
    index = client_dir / "index.html"

    if full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"error": "Not found."})

    candidate = (client_dir / full_path).resolve()
    if full_path and candidate.is_file() and candidate.is_relative_to(client_dir):
        return FileResponse(candidate)
    if index.is_file():
        return FileResponse(index)
    return JSONResponse(status_code=404, content={"error": "Not found."})

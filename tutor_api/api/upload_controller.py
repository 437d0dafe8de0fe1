"""
tutor_api/api/upload_controller.py

Handles incoming requests to /api/upload/*.

This layer is responsible only for HTTP concerns:
  - Parsing the multipart form and picking out the single 'file' part.
  - Delegating storage, validation and extraction to UploadService.
  - Translating service-level errors into appropriate HTTP responses.

Responses (POST /api/upload/file):
  200  The file was stored and its text extracted.
  400  No file was sent, its type is not accepted, or it is over 50 MB.
       Nothing is stored in these cases.
  500  Extraction failed — for example, the PDF could not be parsed or the
       speech-to-text service errored. Body carries a 'details' string.
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from tutor_api.core.constants import UPLOAD_FIELD_NAME
from tutor_api.core.exceptions import AppBaseException, InvalidRequestError
from tutor_api.core.logger import get_logger
from tutor_api.models.upload_models import (
    AnalyzeLectureRequest,
    AnalyzeLectureResponse,
    ExplainUploadRequest,
    ExplainUploadResponse,
    UploadResponse,
)
from tutor_api.services.upload_service import upload_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 400, details: Optional[str] = None) -> JSONResponse:
    """Return a JSON error response with the standard error shape."""
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status, content=content)


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/file", response_model=UploadResponse, summary="Upload a file and extract its text")
async def upload_file(request: Request) -> JSONResponse:
    """
    Accept exactly one file in the 'file' field:

      -F "file=@lecture.pdf"

    Supported: PDF, plain text, Word (.docx), JPEG/PNG/GIF images,
    MP4/AVI/QuickTime video and MP3/WAV audio.
    """
    # ── 1. Parse multipart form ────────────────────────────────────────────────
    try:
        form = await request.form()
    except Exception:
        return _err("Invalid multipart/form-data payload.")

    # ── 2. Require the 'file' part ─────────────────────────────────────────────
    upload = form.get(UPLOAD_FIELD_NAME)
    if not isinstance(upload, StarletteUploadFile):
        return _err("No file uploaded")

    logger.info(
        "Upload received — '%s' (%s)",
        upload.filename,
        upload.content_type or "unknown type",
    )

    # ── 3. Delegate to service ─────────────────────────────────────────────────
    try:
        result: UploadResponse = await upload_service.process_upload(upload)

    except InvalidRequestError as exc:
        logger.warning("Upload rejected: %s", exc)
        return _err(str(exc))

    except AppBaseException as exc:
        logger.exception("Upload pipeline error: %s", exc)
        return _err("Failed to process file", status=500, details=str(exc))

    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during upload: %s", exc)
        return _err("Failed to process file", status=500, details=str(exc))

    finally:
        await upload.close()

    logger.info("Upload complete — '%s' → %s.", result.filename, result.content_type)
    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/explain",
    response_model=ExplainUploadResponse,
    summary="Explain extracted upload content",
)
async def explain(body: ExplainUploadRequest) -> JSONResponse:
    logger.info(
        "Upload explain received — %s, %d character(s)",
        body.content_type,
        len(body.content),
    )
    try:
        result = await upload_service.explain(body)
    except AppBaseException as exc:
        logger.exception("Upload explanation failed: %s", exc)
        return _err("Failed to explain content", status=500)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during upload explanation: %s", exc)
        return _err("Failed to explain content", status=500)

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/analyze-lecture",
    response_model=AnalyzeLectureResponse,
    summary="Build a study guide from a lecture transcript",
)
async def analyze_lecture(body: AnalyzeLectureRequest) -> JSONResponse:
    logger.info("Lecture analysis received — '%s'", body.lecture_title or "untitled")
    try:
        result = await upload_service.analyze_lecture(body)
    except AppBaseException as exc:
        logger.exception("Lecture analysis failed: %s", exc)
        return _err("Failed to analyze lecture content", status=500)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during lecture analysis: %s", exc)
        return _err("Failed to analyze lecture content", status=500)

    return JSONResponse(status_code=200, content=result.to_json())

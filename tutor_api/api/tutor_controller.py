"""
tutor_api/api/tutor_controller.py

Handles incoming requests to /api/tutor/*.

This layer is responsible only for HTTP concerns:
  - Parsing and validating the JSON request body (FastAPI + Pydantic).
  - Delegating prompt construction and the completion call to TutorService.
  - Translating service-level errors into appropriate HTTP responses.

Responses:
  200  The tutor answered.
  400  The request body was malformed (handled app-wide in main.py).
  500  The completion API failed or returned an unusable response.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from tutor_api.core.exceptions import AppBaseException
from tutor_api.core.logger import get_logger
from tutor_api.models.tutor_models import (
    ChatRequest,
    ChatResponse,
    ExplainContentRequest,
    ExplainContentResponse,
    SubjectHelpRequest,
    SubjectHelpResponse,
)
from tutor_api.services.tutor_service import tutor_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tutor", tags=["Tutor"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 500) -> JSONResponse:
    """Return a JSON error response with the standard error shape."""
    return JSONResponse(status_code=status, content={"error": message})


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/chat", response_model=ChatResponse, summary="Chat with the AI tutor")
async def chat(body: ChatRequest) -> JSONResponse:
    """
    Accepts a JSON body with:

      message  (required) — the student's question.
      subject  (optional) — current subject focus, e.g. "Statics".
      context  (optional) — extra context such as uploaded content.
    """
    logger.info("Tutor chat received — subject: %s", body.subject or "-")
    try:
        result = await tutor_service.chat(body)
    except AppBaseException as exc:
        logger.exception("Tutor chat failed: %s", exc)
        return _err("Failed to get response from AI tutor")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during tutor chat: %s", exc)
        return _err("Failed to get response from AI tutor")

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/subject-help",
    response_model=SubjectHelpResponse,
    summary="Structured help for a subject topic",
)
async def subject_help(body: SubjectHelpRequest) -> JSONResponse:
    logger.info("Subject help received — %s / %s", body.subject, body.topic)
    try:
        result = await tutor_service.subject_help(body)
    except AppBaseException as exc:
        logger.exception("Subject help failed: %s", exc)
        return _err("Failed to get subject-specific help")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during subject help: %s", exc)
        return _err("Failed to get subject-specific help")

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/explain-content",
    response_model=ExplainContentResponse,
    summary="Explain study material",
)
async def explain_content(body: ExplainContentRequest) -> JSONResponse:
    logger.info(
        "Explain content received — %s, %d character(s)",
        body.content_type,
        len(body.content),
    )
    try:
        result = await tutor_service.explain_content(body)
    except AppBaseException as exc:
        logger.exception("Content explanation failed: %s", exc)
        return _err("Failed to explain content")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during content explanation: %s", exc)
        return _err("Failed to explain content")

    return JSONResponse(status_code=200, content=result.to_json())

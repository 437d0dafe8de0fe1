"""
tutor_api/api/solver_controller.py

Handles incoming requests to /api/solve/*.

This layer is responsible only for HTTP concerns:
  - Parsing and validating the JSON request body (FastAPI + Pydantic).
  - Delegating to SolverService.
  - Translating service-level errors into appropriate HTTP responses.

Responses:
  200  The problem was solved / checked / generated / calculated.
  400  The request body was malformed, or (calculate only) the expression
       could not be evaluated. Body: { "error": ..., "details": ... }.
  500  The completion API failed or returned an unusable response.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from tutor_api.core.exceptions import AppBaseException, InvalidExpressionError
from tutor_api.core.logger import get_logger
from tutor_api.models.solver_models import (
    CalculateRequest,
    CalculateResponse,
    CheckWorkRequest,
    CheckWorkResponse,
    GenerateProblemsRequest,
    GenerateProblemsResponse,
    SolveProblemRequest,
    SolveProblemResponse,
)
from tutor_api.services.solver_service import solver_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/solve", tags=["Problem solver"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 500, details: Optional[str] = None) -> JSONResponse:
    """Return a JSON error response with the standard error shape."""
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status, content=content)


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post(
    "/solve-problem",
    response_model=SolveProblemResponse,
    summary="Solve an engineering problem step by step",
)
async def solve_problem(body: SolveProblemRequest) -> JSONResponse:
    logger.info("Solve request received — subject: %s", body.subject or "-")
    try:
        result = await solver_service.solve_problem(body)
    except AppBaseException as exc:
        logger.exception("Problem solving failed: %s", exc)
        return _err("Failed to solve problem")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while solving problem: %s", exc)
        return _err("Failed to solve problem")

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/check-work",
    response_model=CheckWorkResponse,
    summary="Review a student's solution",
)
async def check_work(body: CheckWorkRequest) -> JSONResponse:
    logger.info("Check-work request received.")
    try:
        result = await solver_service.check_work(body)
    except AppBaseException as exc:
        logger.exception("Work check failed: %s", exc)
        return _err("Failed to check work")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while checking work: %s", exc)
        return _err("Failed to check work")

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/generate-problems",
    response_model=GenerateProblemsResponse,
    summary="Generate practice problems",
)
async def generate_problems(body: GenerateProblemsRequest) -> JSONResponse:
    logger.info(
        "Problem generation received — %d × %s / %s (%s)",
        body.count,
        body.subject,
        body.topic,
        body.difficulty,
    )
    try:
        result = await solver_service.generate_problems(body)
    except AppBaseException as exc:
        logger.exception("Problem generation failed: %s", exc)
        return _err("Failed to generate practice problems")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while generating problems: %s", exc)
        return _err("Failed to generate practice problems")

    return JSONResponse(status_code=200, content=result.to_json())


@router.post(
    "/calculate",
    response_model=CalculateResponse,
    summary="Evaluate an expression and explain the result",
)
async def calculate(body: CalculateRequest) -> JSONResponse:
    """
    Accepts a JSON body with:

      expression (required) — e.g. "2^3 + sqrt(16)".
      context    (optional) — what the number means physically.

    The expression is evaluated locally. An expression that cannot be
    evaluated is rejected with 400 before the LLM is contacted.
    """
    logger.info("Calculate request received — expression: '%s'", body.expression[:120])
    try:
        result = await solver_service.calculate(body)
        response = JSONResponse(status_code=200, content=result.to_json())
    except InvalidExpressionError as exc:
        logger.warning("Invalid expression rejected: %s", exc)
        return _err("Invalid mathematical expression", status=400, details=str(exc))
    except AppBaseException as exc:
        logger.exception("Calculation failed: %s", exc)
        return _err("Failed to perform calculation")
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during calculation: %s", exc)
        return _err("Failed to perform calculation")

    return response

"""
tutor_api/services/solver_service.py

Problem solving, work checking, practice-problem generation and the
calculator.

The calculator is the one flow with a local step:

    expression
      └─ ExpressionEvaluator.evaluate()   → result   (400 on failure, no LLM call)
           └─ compose(EXPLAIN_CALCULATION)
                └─ LLMGateway.complete()  → explanation
"""

from __future__ import annotations

from tutor_api.calculator.evaluator import ExpressionEvaluator
from tutor_api.core.logger import get_logger
from tutor_api.llm.base import LLMGateway
from tutor_api.llm.openai_gateway import OpenAIGateway
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
from tutor_api.prompts import templates
from tutor_api.prompts.composer import compose

logger = get_logger(__name__)

DEFAULT_SUBJECT = "General Engineering"


class SolverService:
    """
    Wires the problem-solver templates and the calculator to the gateway.

    Both collaborators are constructor-injected so tests can count gateway
    calls around the calculator.
    """

    def __init__(
        self,
        gateway: LLMGateway | None = None,
        evaluator: ExpressionEvaluator | None = None,
    ) -> None:
        self._gateway: LLMGateway = gateway or OpenAIGateway()
        self._evaluator: ExpressionEvaluator = evaluator or ExpressionEvaluator()

    # ── Public API ─────────────────────────────────────────────────────────────

    async def solve_problem(self, request: SolveProblemRequest) -> SolveProblemResponse:
        prompt = compose(
            templates.SOLVE_PROBLEM,
            {
                "problem": request.problem,
                "subject": request.subject,
                "context": request.context,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return SolveProblemResponse(
            solution=completion.text,
            problem=request.problem,
            subject=request.subject or DEFAULT_SUBJECT,
        )

    async def check_work(self, request: CheckWorkRequest) -> CheckWorkResponse:
        prompt = compose(
            templates.CHECK_WORK,
            {
                "problem": request.problem,
                "student_solution": request.student_solution,
                "correct_answer": request.correct_answer,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return CheckWorkResponse(feedback=completion.text, problem=request.problem)

    async def generate_problems(
        self, request: GenerateProblemsRequest
    ) -> GenerateProblemsResponse:
        prompt = compose(
            templates.GENERATE_PROBLEMS,
            {
                "subject": request.subject,
                "topic": request.topic,
                "difficulty": request.difficulty,
                "count": request.count,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return GenerateProblemsResponse(
            problems=completion.text,
            subject=request.subject,
            topic=request.topic,
            difficulty=request.difficulty,
        )

    async def calculate(self, request: CalculateRequest) -> CalculateResponse:
        """
        Evaluate the expression locally, then ask the LLM to explain it.

        Raises:
            InvalidExpressionError: The expression could not be evaluated.
                                    The gateway is not called.
            UpstreamError:          The explanation call failed.
        """
        result = self._evaluator.evaluate(request.expression)

        prompt = compose(
            templates.EXPLAIN_CALCULATION,
            {
                "expression": request.expression,
                "result": result,
                "context": request.context,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return CalculateResponse(
            expression=request.expression,
            result=result,
            explanation=completion.text,
        )


# ── Module-level singleton ─────────────────────────────────────────────────────

solver_service = SolverService()

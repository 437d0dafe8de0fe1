"""
tutor_api/models/solver_models.py

Pydantic DTOs for the /api/solve flow — request bodies and responses.
"""

from typing import Optional, Union

from pydantic import Field

from tutor_api.models.base import CamelModel, NonBlankStr


class SolveProblemRequest(CamelModel):
    """
    JSON body for POST /api/solve/solve-problem.

        { "problem": "A 10 kg block rests on a 30° incline...", "subject": "Statics" }
    """

    problem: NonBlankStr
    subject: Optional[str] = None
    context: Optional[str] = None


class SolveProblemResponse(CamelModel):
    solution: str
    problem: str
    subject: str


class CheckWorkRequest(CamelModel):
    """JSON body for POST /api/solve/check-work."""

    problem: NonBlankStr
    student_solution: NonBlankStr
    correct_answer: Optional[str] = None


class CheckWorkResponse(CamelModel):
    feedback: str
    problem: str


class GenerateProblemsRequest(CamelModel):
    """
    JSON body for POST /api/solve/generate-problems.

        { "subject": "Dynamics", "topic": "Projectiles", "difficulty": "beginner", "count": 3 }
    """

    subject: NonBlankStr
    topic: NonBlankStr
    difficulty: str = "beginner"
    count: int = Field(default=3, ge=1, le=10)


class GenerateProblemsResponse(CamelModel):
    problems: str
    subject: str
    topic: str
    difficulty: str


class CalculateRequest(CamelModel):
    """
    JSON body for POST /api/solve/calculate.

        { "expression": "2^3 + sqrt(16)", "context": "beam deflection" }

    A blank expression is not rejected here; the evaluator reports it as an
    invalid expression like any other unparseable input.
    """

    expression: str
    context: Optional[str] = None


class CalculateResponse(CamelModel):
    expression: str
    result: Union[int, float, str]
    explanation: str

"""
tests/services/test_solver_service.py

Unit tests for SolverService, with a mocked gateway.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tutor_api.core.exceptions import InvalidExpressionError, UpstreamError
from tutor_api.models.solver_models import (
    CalculateRequest,
    CheckWorkRequest,
    GenerateProblemsRequest,
    SolveProblemRequest,
)
from tutor_api.services.solver_service import SolverService


class TestSolveProblem:

    @pytest.mark.asyncio
    async def test_subject_line_and_default(self, fake_gateway) -> None:
        service = SolverService(gateway=fake_gateway)

        with_subject = await service.solve_problem(
            SolveProblemRequest(problem="Find the reaction.", subject="Statics")
        )
        without_subject = await service.solve_problem(SolveProblemRequest(problem="Find v."))

        assert with_subject.subject == "Statics"
        assert without_subject.subject == "General Engineering"
        first_system = fake_gateway.complete.await_args_list[0].args[0]
        assert "SUBJECT AREA: Statics" in first_system


class TestCheckWork:

    @pytest.mark.asyncio
    async def test_feedback_returned(self, fake_gateway) -> None:
        service = SolverService(gateway=fake_gateway)

        result = await service.check_work(
            CheckWorkRequest(problem="v = d/t, d=10, t=2", student_solution="v = 20")
        )

        assert result.feedback == "AI answer"
        assert fake_gateway.complete.await_args.args[1] == "Please review my work on this problem."


class TestGenerateProblems:

    @pytest.mark.asyncio
    async def test_count_and_difficulty_in_prompt(self, fake_gateway) -> None:
        service = SolverService(gateway=fake_gateway)

        result = await service.generate_problems(
            GenerateProblemsRequest(subject="Dynamics", topic="Work", difficulty="advanced", count=5)
        )

        assert result.difficulty == "advanced"
        user_message = fake_gateway.complete.await_args.args[1]
        assert user_message.startswith("Generate 5 practice problems for Dynamics - Work at advanced level.")


class TestCalculate:

    @pytest.mark.asyncio
    async def test_result_embedded_in_explanation_prompt(self, fake_gateway) -> None:
        service = SolverService(gateway=fake_gateway)

        result = await service.calculate(CalculateRequest(expression="2+2", context="two forces"))

        assert result.result == 4
        assert result.explanation == "AI answer"
        system_message, user_message, options = fake_gateway.complete.await_args.args
        assert "Expression: 2+2" in user_message
        assert "Result: 4" in user_message
        assert system_message.endswith("Context: two forces")
        assert options.max_tokens == 1000

    @pytest.mark.asyncio
    async def test_invalid_expression_never_calls_gateway(self, fake_gateway) -> None:
        service = SolverService(gateway=fake_gateway)

        with pytest.raises(InvalidExpressionError):
            await service.calculate(CalculateRequest(expression="2 +"))

        assert fake_gateway.complete.await_count == 0

    @pytest.mark.asyncio
    async def test_evaluator_is_injectable(self, fake_gateway) -> None:
        evaluator = MagicMock()
        evaluator.evaluate.return_value = 42
        service = SolverService(gateway=fake_gateway, evaluator=evaluator)

        result = await service.calculate(CalculateRequest(expression="answer"))

        assert result.result == 42
        evaluator.evaluate.assert_called_once_with("answer")

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, fake_gateway) -> None:
        fake_gateway.complete.side_effect = UpstreamError("down")
        service = SolverService(gateway=fake_gateway)

        with pytest.raises(UpstreamError):
            await service.calculate(CalculateRequest(expression="1+1"))

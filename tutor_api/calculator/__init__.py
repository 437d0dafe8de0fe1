"""tutor_api/calculator/__init__.py — public API of the calculator package."""

from tutor_api.calculator.evaluator import ExpressionEvaluator

__all__ = ["ExpressionEvaluator"]

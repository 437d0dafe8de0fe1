"""
tutor_api/calculator/evaluator.py

Deterministic expression evaluation with SymPy.

This is the only result the service computes locally; the LLM is asked to
explain it afterwards. SymPy's parser evaluates Python code under the hood,
so input is screened first and evaluated against a namespace holding only
calculator functions (no builtins).

Evaluation happens in two passes:

    text
      └─ parse_expr(evaluate=False)     → unevaluated tree
           └─ _Builder.build()          → bottom-up evaluation; powers,
                                          exponentials and factorials are
                                          size-checked before they are computed
"""

from __future__ import annotations

import math
import re
from tokenize import TokenError
from typing import Any, Dict, Optional, Union

import sympy
from sympy import SympifyError
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from tutor_api.core.constants import (
    MAX_EXACT_INTEGER_DIGITS,
    MAX_EXPRESSION_LENGTH,
    MAX_FACTORIAL_ARGUMENT,
    MAX_RESULT_DIGITS,
)
from tutor_api.core.exceptions import InvalidExpressionError
from tutor_api.core.logger import get_logger

logger = get_logger(__name__)

Result = Union[int, float, str]

_TRANSFORMATIONS = standard_transformations + (
    convert_xor,                # 2^3 is a power, as on a calculator
    implicit_multiplication,    # 2pi, 3(x + 1)
)

# Names the parser may emit, plus the calculator's functions and constants.
_SYMPY_NAMES = (
    "Add", "Mul", "Pow", "Mod", "Integer", "Float", "Rational", "Symbol", "Function",
    "pi", "E", "I",
    "sqrt", "cbrt", "exp", "log", "ln",
    "sin", "cos", "tan", "cot", "sec", "csc",
    "asin", "acos", "atan", "acot", "atan2",
    "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    "Abs", "floor", "ceiling", "sign", "factorial", "factorial2",
)

_NAMESPACE: Dict[str, Any] = {name: getattr(sympy, name) for name in _SYMPY_NAMES}
_NAMESPACE.update(
    abs=sympy.Abs,
    ceil=sympy.ceiling,
    log10=lambda value: sympy.log(value, 10),
    __builtins__={},
)

# Digits, identifiers, arithmetic operators, parentheses, commas, decimal points.
_ALLOWED = re.compile(r"^[0-9A-Za-z\s+\-*/^().,%!]*$")
# Attribute access such as x.func or (1).real.
_ATTRIBUTE = re.compile(r"[A-Za-z)]\s*\.\s*[A-Za-z]")

_PARSE_ERRORS = (
    SympifyError, SyntaxError, TokenError, TypeError, ValueError,
    AttributeError, NameError, ZeroDivisionError,
)

_LOG10_E = math.log10(math.e)


class ExpressionEvaluator:
    """Parses and evaluates a single math expression."""

    def evaluate(self, expression: str) -> Result:
        """
        Evaluate ``expression``.

        Returns:
            ``int`` for integer results, ``float`` for other finite real
            numbers, and the string form for anything else (symbolic,
            complex or infinite results, and numbers too large for either).

        Raises:
            InvalidExpressionError: The expression is blank, too long,
                                    contains disallowed characters, cannot
                                    be parsed/evaluated or would produce a
                                    number too large to compute.
        """
        text = (expression or "").strip()
        self._screen(text)

        try:
            with sympy.evaluate(False):
                tree = parse_expr(
                    text,
                    global_dict=dict(_NAMESPACE),
                    transformations=_TRANSFORMATIONS,
                    evaluate=False,
                )
            if not isinstance(tree, sympy.Basic):
                raise InvalidExpressionError(f"'{text}' is not a mathematical expression.")
            expr = _Builder(text).build(tree)
        except _PARSE_ERRORS as exc:
            raise InvalidExpressionError(
                f"Could not parse expression '{text}': {exc}"
            ) from exc

        result = _to_result(expr)
        logger.debug("Evaluated '%s' → %r", text, result)
        return result

    @staticmethod
    def _screen(text: str) -> None:
        if not text:
            raise InvalidExpressionError("Expression must not be empty.")
        if len(text) > MAX_EXPRESSION_LENGTH:
            raise InvalidExpressionError(
                f"Expression is longer than {MAX_EXPRESSION_LENGTH} characters."
            )
        if not _ALLOWED.match(text) or _ATTRIBUTE.search(text):
            raise InvalidExpressionError(
                f"Expression '{text}' contains unsupported characters."
            )


class _Builder:
    """
    Re-creates an unevaluated tree with evaluation switched on, children
    first, refusing any node whose exact value would be too large.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def build(self, node: sympy.Basic) -> sympy.Basic:
        if node.is_Atom:
            return node
        args = [self.build(arg) for arg in node.args]

        if isinstance(node, sympy.Pow):
            self._check_power(*args)
        elif isinstance(node, (sympy.exp, sympy.sinh, sympy.cosh)):
            self._check_exponential(args[0])
        elif isinstance(node, (sympy.factorial, sympy.factorial2)):
            self._check_factorial(args[0])

        return node.func(*args)

    def _check_power(self, base: sympy.Basic, exponent: sympy.Basic) -> None:
        base_digits = _exact_digits(base)
        exponent_log = _log10_abs(exponent)
        if not base_digits or exponent_log is None:
            return
        # digits(base ** exponent) ≈ |exponent| * digits(base)
        if exponent_log + math.log10(base_digits) > math.log10(MAX_RESULT_DIGITS):
            self._too_large()

    def _check_exponential(self, argument: sympy.Basic) -> None:
        argument_log = _log10_abs(argument)
        if argument_log is None:
            return
        if argument_log + math.log10(_LOG10_E) > math.log10(MAX_RESULT_DIGITS):
            self._too_large()

    def _check_factorial(self, argument: sympy.Basic) -> None:
        argument_log = _log10_abs(argument)
        if argument_log is not None and argument_log > math.log10(MAX_FACTORIAL_ARGUMENT):
            raise InvalidExpressionError(
                f"Factorial argument in '{self._text}' is larger than "
                f"{MAX_FACTORIAL_ARGUMENT}."
            )

    def _too_large(self) -> None:
        raise InvalidExpressionError(
            f"'{self._text}' would produce a number with more than "
            f"{MAX_RESULT_DIGITS} digits."
        )


def _log10_abs(value: sympy.Basic) -> Optional[float]:
    """log10(|value|) for a number, -inf for zero, None when not numeric."""
    if not value.is_number:
        return None
    if value.is_Rational:
        if value.p == 0:
            return -math.inf
        return math.log10(abs(value.p)) - math.log10(value.q)
    magnitude = sympy.Abs(value).evalf(15)
    if magnitude.is_zero:
        return -math.inf
    if not magnitude.is_Float:
        # oo, zoo or nan
        return math.inf
    return float(sympy.log(magnitude)) / math.log(10)


def _exact_digits(value: sympy.Basic) -> Optional[float]:
    """
    Digits needed to hold ``value`` exactly; 0 for 0, 1 and -1 (any power of
    them stays small) and None when not numeric.
    """
    if not value.is_number:
        return None
    if value.is_Rational:
        return max(math.log10(abs(value.p) or 1), math.log10(value.q))
    magnitude = _log10_abs(value)
    if magnitude is None or math.isinf(magnitude):
        return None
    return abs(magnitude)


def _to_result(expr: sympy.Basic) -> Result:
    """Map a SymPy object to a JSON-friendly value."""
    if expr.is_Integer:
        return _integer_result(expr, int(expr))
    if expr.is_number and expr.is_real and expr.is_finite:
        value = expr.evalf()
        if expr.is_integer:
            return _integer_result(expr, int(value))
        number = float(value)
        if math.isfinite(number):
            return number
        return _scientific(expr)
    return str(expr)


def _integer_result(expr: sympy.Basic, value: int) -> Result:
    if value and math.log10(abs(value)) >= MAX_EXACT_INTEGER_DIGITS:
        return _scientific(expr)
    return value


def _scientific(expr: sympy.Basic) -> str:
    """Finite but unrepresentable results, e.g. '1.97007111401705e+434'."""
    return str(expr.evalf(15))

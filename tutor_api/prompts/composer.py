"""
tutor_api/prompts/composer.py

Turns a PromptTemplate plus caller-supplied fields into the system/user
message pair sent to the LLM gateway.

Composition is pure string assembly:
  1. ``{placeholder}`` interpolation (missing fields → template default → "")
  2. one "LABEL: value" line appended per optional field that is present
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from tutor_api.llm.base import CompletionOptions


@dataclass(frozen=True)
class PromptTemplate:
    """
    A fixed instructional prompt with interpolation points.

    Attributes:
        system         : System message text, may contain ``{field}`` slots.
                         Empty for single-message prompts.
        user           : User message text, may contain ``{field}`` slots.
        optional_lines : ``(field, LABEL)`` pairs appended as "LABEL: value"
                         when the field is present and non-blank.
        defaults       : Fallback values for absent fields.
        temperature    : Sampling temperature for this use case.
        max_tokens     : Completion length cap for this use case.
    """

    system: str
    user: str
    optional_lines: Tuple[Tuple[str, str], ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    temperature: float = 0.3
    max_tokens: int = 2000


@dataclass(frozen=True)
class ComposedPrompt:
    """The messages and completion options for one request."""

    system_message: str
    user_message: str
    temperature: float
    max_tokens: int

    def options(self, model: Optional[str] = None) -> CompletionOptions:
        return CompletionOptions(
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            model=model,
        )


class _Fields(dict):
    """format_map() mapping that renders unknown placeholders as ""."""

    def __missing__(self, key: str) -> str:
        return ""


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def compose(
    template: PromptTemplate,
    fields: Mapping[str, Any],
    temperature: Optional[float] = None,
) -> ComposedPrompt:
    """
    Build the message pair for ``template``.

    Args:
        template    : The use-case template.
        fields      : Caller values; ``None`` and blank strings count as absent.
        temperature : Overrides ``template.temperature`` when given.

    Returns:
        ComposedPrompt ready to hand to ``LLMGateway.complete``.

    Optional lines go to the system message, or to the user message when the
    template has no system text.
    """
    values: Dict[str, Any] = _Fields(template.defaults)
    values.update({k: v for k, v in fields.items() if _present(v)})

    system = template.system.format_map(values)
    user = template.user.format_map(values)

    extra = "".join(
        f"\n\n{label}: {values[name]}"
        for name, label in template.optional_lines
        if _present(values.get(name))
    )
    if template.system:
        system += extra
    else:
        user += extra

    return ComposedPrompt(
        system_message=system,
        user_message=user,
        temperature=template.temperature if temperature is None else temperature,
        max_tokens=template.max_tokens,
    )

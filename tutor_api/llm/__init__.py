"""tutor_api/llm/__init__.py — public API of the llm package."""

from tutor_api.llm.base import Completion, CompletionOptions, LLMGateway
from tutor_api.llm.openai_gateway import OpenAIGateway

__all__ = [
    "LLMGateway",
    "Completion",
    "CompletionOptions",
    "OpenAIGateway",
]

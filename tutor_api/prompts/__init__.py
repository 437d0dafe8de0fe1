"""tutor_api/prompts/__init__.py — public API of the prompts package."""

from tutor_api.prompts.composer import ComposedPrompt, PromptTemplate, compose

__all__ = [
    "PromptTemplate",
    "ComposedPrompt",
    "compose",
]

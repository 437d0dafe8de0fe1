"""
tutor_api/services/tutor_service.py

General tutoring: free chat, subject help and content explanation.

    request DTO
      └─ compose(template, fields)     → ComposedPrompt
           └─ LLMGateway.complete()    → Completion
                └─ response DTO

Every call is one upstream request; nothing is cached or deduplicated.
"""

from __future__ import annotations

from tutor_api.core.config import settings
from tutor_api.core.logger import get_logger
from tutor_api.llm.base import LLMGateway
from tutor_api.llm.openai_gateway import OpenAIGateway
from tutor_api.models.tutor_models import (
    ChatRequest,
    ChatResponse,
    ExplainContentRequest,
    ExplainContentResponse,
    SubjectHelpRequest,
    SubjectHelpResponse,
)
from tutor_api.prompts import templates
from tutor_api.prompts.composer import compose

logger = get_logger(__name__)


class TutorService:
    """Wires the tutor prompt templates to the LLM gateway."""

    def __init__(self, gateway: LLMGateway | None = None) -> None:
        self._gateway: LLMGateway = gateway or OpenAIGateway()

    # ── Public API ─────────────────────────────────────────────────────────────

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Answer a free-form student message.

        The temperature comes from ``settings.gpt_temperature`` so it can be
        tuned per deployment.

        Raises:
            UpstreamError: The completion call failed.
        """
        prompt = compose(
            templates.TUTOR_CHAT,
            {
                "message": request.message,
                "subject": request.subject,
                "context": request.context,
            },
            temperature=settings.gpt_temperature,
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return ChatResponse(response=completion.text, usage=completion.usage)

    async def subject_help(self, request: SubjectHelpRequest) -> SubjectHelpResponse:
        """Structured overview of one topic within a subject."""
        prompt = compose(
            templates.SUBJECT_HELP,
            {
                "subject": request.subject,
                "topic": request.topic,
                "level": request.level,
                "objective": templates.LEARNING_OBJECTIVES.get(request.level.lower()),
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return SubjectHelpResponse(
            response=completion.text,
            subject=request.subject,
            topic=request.topic,
            level=request.level,
        )

    async def explain_content(self, request: ExplainContentRequest) -> ExplainContentResponse:
        """Explain a block of study material in beginner terms."""
        prompt = compose(
            templates.EXPLAIN_CONTENT,
            {
                "content": request.content,
                "content_type": request.content_type,
                "context": request.context,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return ExplainContentResponse(
            explanation=completion.text,
            content_type=request.content_type,
        )


# ── Module-level singleton ─────────────────────────────────────────────────────
# Controllers import this instance. Tests construct TutorService directly
# with an injected gateway mock.

tutor_service = TutorService()

"""
tutor_api/llm/base.py

Abstract interface for the language-model layer.

Design goals:
  - Services depend only on this interface, never on the openai SDK.
  - Completion and CompletionOptions are the shared vocabulary between the
    prompt composer, the services and the gateway.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


# ── Shared data-transfer objects ──────────────────────────────────────────────

@dataclass(frozen=True)
class CompletionOptions:
    """
    Per-call knobs for a chat completion.

    Attributes:
        temperature : Sampling temperature.
        max_tokens  : Upper bound on generated tokens.
        model       : Model override; ``None`` means the gateway default.
    """

    temperature: float = 0.3
    max_tokens: int = 2000
    model: Optional[str] = None


@dataclass(frozen=True)
class Completion:
    """
    Text returned by the completion API.

    Attributes:
        text  : The assistant message content (never empty).
        usage : Token usage as reported by the provider, or None.
    """

    text: str
    usage: Optional[Dict[str, Any]] = None


# ── Abstract base ──────────────────────────────────────────────────────────────

class LLMGateway(ABC):
    """
    Contract every language-model backend must fulfil.

    There is no retry, backoff or caching at this layer: every call is one
    upstream request and every failure surfaces as UpstreamError.
    """

    @abstractmethod
    async def complete(
        self,
        system_message: str,
        user_message: str,
        options: CompletionOptions | None = None,
    ) -> Completion:
        """
        Run a single chat completion.

        Args:
            system_message : Instructions for the model. Omitted when blank.
            user_message   : The student's message or composed request.
            options        : Temperature / max tokens / model override.

        Returns:
            Completion with the response text and token usage.

        Raises:
            UpstreamError: On any API failure or malformed response.
        """

    @abstractmethod
    async def describe_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        instruction: str,
        max_tokens: int = 2000,
    ) -> str:
        """
        Ask a vision-capable model to describe an image.

        Raises:
            UpstreamError: On any API failure or malformed response.
        """

    @abstractmethod
    async def transcribe(self, audio_path: Path) -> str:
        """
        Transcribe an audio file to text.

        Raises:
            UpstreamError: On any API failure.
        """

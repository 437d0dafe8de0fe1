"""
tutor_api/llm/openai_gateway.py

OpenAI implementation of the LLMGateway interface.

The AsyncOpenAI client is created lazily on first use so the FastAPI app
imports cleanly even when OPENAI_API_KEY is not set (e.g. in tests).
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from tutor_api.core.config import settings
from tutor_api.core.exceptions import UpstreamError
from tutor_api.core.logger import get_logger
from tutor_api.llm.base import Completion, CompletionOptions, LLMGateway

logger = get_logger(__name__)


class OpenAIGateway(LLMGateway):
    """
    LLMGateway backed by the OpenAI chat completions, vision and audio APIs.

    Models default to ``settings.gpt_model``, ``settings.vision_model`` and
    ``settings.transcription_model``.
    """

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        """
        Args:
            client: Pre-built SDK client. Built from settings on first use
                    when omitted.
        """
        self._client: Optional[AsyncOpenAI] = client

    # ── Lazy loader ────────────────────────────────────────────────────────────

    def _get_client(self) -> AsyncOpenAI:
        """Return the SDK client, initialising it on first call."""
        if self._client is None:
            if not settings.openai_api_key:
                raise UpstreamError("OPENAI_API_KEY is not configured.")
            self._client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
            )
        return self._client

    # ── LLMGateway interface ───────────────────────────────────────────────────

    async def complete(
        self,
        system_message: str,
        user_message: str,
        options: CompletionOptions | None = None,
    ) -> Completion:
        opts = options or CompletionOptions()
        model = opts.model or settings.gpt_model

        messages: List[Dict[str, Any]] = []
        if system_message.strip():
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": user_message})

        logger.debug(
            "Completion request — model: %s, temperature: %.2f, max_tokens: %d",
            model,
            opts.temperature,
            opts.max_tokens,
        )

        try:
            response = await self._get_client().chat.completions.create(
                model=model,
                messages=messages,
                temperature=opts.temperature,
                max_tokens=opts.max_tokens,
            )
        except OpenAIError as exc:
            raise UpstreamError(f"Completion request failed: {exc}") from exc

        text = _first_message_text(response)
        usage = response.usage.model_dump() if getattr(response, "usage", None) else None
        return Completion(text=text, usage=usage)

    async def describe_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        instruction: str,
        max_tokens: int = 2000,
    ) -> str:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": instruction},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                    },
                ],
            }
        ]

        try:
            response = await self._get_client().chat.completions.create(
                model=settings.vision_model,
                messages=messages,
                max_tokens=max_tokens,
            )
        except OpenAIError as exc:
            raise UpstreamError(f"Image analysis request failed: {exc}") from exc

        return _first_message_text(response)

    async def transcribe(self, audio_path: Path) -> str:
        try:
            with open(audio_path, "rb") as audio_file:
                transcription = await self._get_client().audio.transcriptions.create(
                    model=settings.transcription_model,
                    file=audio_file,
                )
        except OpenAIError as exc:
            raise UpstreamError(f"Transcription request failed: {exc}") from exc

        text = getattr(transcription, "text", None)
        if not isinstance(text, str):
            raise UpstreamError("Transcription response did not contain text.")
        return text


# ── Helpers ────────────────────────────────────────────────────────────────────

def _first_message_text(response: Any) -> str:
    """Pull the first choice's content out of a chat completion, or raise."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise UpstreamError(f"Malformed completion response: {exc}") from exc

    if not content or not content.strip():
        raise UpstreamError("Completion response contained no text.")
    return content

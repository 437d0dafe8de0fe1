"""
tutor_api/extractor/base.py

Abstract interface for the content-extraction layer.

Design goals:
  - One Extractor subclass per format; each decides for itself which MIME
    types it accepts.
  - ContentType and ExtractionResult are the shared vocabulary between the
    extractors, the upload service and the HTTP response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tutor_api.core.exceptions import ExtractionError


# ── Shared data-transfer objects ──────────────────────────────────────────────

class ContentType(str, Enum):
    """Kind of text an upload was turned into. Values are the wire labels."""

    PDF = "PDF document"
    TEXT = "text file"
    WORD_DOCUMENT = "Word document"
    IMAGE_ANALYSIS = "image analysis"
    VIDEO_TRANSCRIPT = "video transcript"
    AUDIO_TRANSCRIPT = "audio transcript"


@dataclass(frozen=True)
class ExtractionResult:
    """
    The text pulled out of a single upload.

    Attributes:
        content_type : Which strategy produced the text.
        text         : Extracted content; never blank.
    """

    content_type: ContentType
    text: str


# ── Abstract base ──────────────────────────────────────────────────────────────

class Extractor(ABC):
    """
    Contract every extraction strategy must fulfil.

    Subclasses set ``content_type`` and implement ``accepts`` and ``extract``.
    """

    content_type: ContentType

    @abstractmethod
    def accepts(self, mime_type: str) -> bool:
        """Return True when this strategy handles the given MIME type."""

    @abstractmethod
    async def extract(self, file_path: Path, mime_type: str) -> str:
        """
        Turn the file into plain text.

        Args:
            file_path : Location of the stored upload.
            mime_type : Declared MIME type of the upload.

        Returns:
            Non-blank extracted text.

        Raises:
            ExtractionError: If the file cannot be read, the external
                             service fails, or the result is empty.
        """


class PrefixExtractor(Extractor):
    """Extractor that accepts every MIME type under one top-level type."""

    mime_prefix: str

    def accepts(self, mime_type: str) -> bool:
        return mime_type.startswith(self.mime_prefix)


def require_text(text: str | None, what: str) -> str:
    """Return ``text`` unchanged, or raise ExtractionError when it is blank."""
    if not text or not text.strip():
        raise ExtractionError(f"No content could be extracted from {what}.")
    return text

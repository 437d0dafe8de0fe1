"""
tutor_api/extractor/content_extractor.py

Selects an extraction strategy by MIME type and runs it.

Dispatch is first-match over an ordered list:

    application/pdf   → PDFExtractor
    text/plain        → PlainTextExtractor
    .docx             → DocxExtractor
    image/*           → ImageExtractor
    video/*           → VideoExtractor
    audio/*           → AudioExtractor
    anything else     → UnsupportedTypeError
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from tutor_api.core.exceptions import UnsupportedTypeError
from tutor_api.core.logger import get_logger
from tutor_api.extractor.base import ExtractionResult, Extractor
from tutor_api.extractor.media_extractor import (
    AudioExtractor,
    ImageExtractor,
    VideoExtractor,
)
from tutor_api.extractor.pdf_extractor import PDFExtractor
from tutor_api.extractor.text_extractor import DocxExtractor, PlainTextExtractor
from tutor_api.llm.base import LLMGateway

logger = get_logger(__name__)


def default_extractors(gateway: LLMGateway) -> List[Extractor]:
    """The production strategy list, in dispatch order."""
    return [
        PDFExtractor(),
        PlainTextExtractor(),
        DocxExtractor(),
        ImageExtractor(gateway),
        VideoExtractor(gateway),
        AudioExtractor(gateway),
    ]


class ContentExtractor:
    """Dispatches an upload to the first strategy that accepts its MIME type."""

    def __init__(self, extractors: Sequence[Extractor]) -> None:
        self._extractors: List[Extractor] = list(extractors)

    def select(self, mime_type: str) -> Extractor:
        """
        Return the strategy for ``mime_type``.

        Raises:
            UnsupportedTypeError: If no strategy accepts it.
        """
        for extractor in self._extractors:
            if extractor.accepts(mime_type):
                return extractor
        raise UnsupportedTypeError(
            f"Unsupported file type for content extraction: '{mime_type}'"
        )

    async def extract(self, file_path: Path, mime_type: str) -> ExtractionResult:
        """
        Extract text from a stored upload.

        Raises:
            UnsupportedTypeError : No strategy handles ``mime_type``.
            ExtractionError      : The selected strategy failed.
        """
        extractor = self.select(mime_type)
        logger.info(
            "Extracting '%s' (%s) as %s.",
            file_path.name,
            mime_type,
            extractor.content_type.value,
        )
        text = await extractor.extract(file_path, mime_type)
        return ExtractionResult(content_type=extractor.content_type, text=text)

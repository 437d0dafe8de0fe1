"""
tutor_api/extractor/text_extractor.py

Plain-text and Word (.docx) extraction. Both read the file directly; no
external service is involved.
"""

from __future__ import annotations

from pathlib import Path

import docx

from tutor_api.core.constants import DOCX_CONTENT_TYPE, TEXT_CONTENT_TYPE
from tutor_api.core.exceptions import ExtractionError
from tutor_api.extractor.base import ContentType, Extractor, require_text


class PlainTextExtractor(Extractor):
    """Reads the raw bytes and decodes them as UTF-8."""

    content_type = ContentType.TEXT

    def accepts(self, mime_type: str) -> bool:
        return mime_type == TEXT_CONTENT_TYPE

    async def extract(self, file_path: Path, mime_type: str) -> str:
        try:
            raw = file_path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Failed to read text file: {exc}") from exc
        # Undecodable bytes become U+FFFD instead of failing the upload.
        return require_text(raw.decode("utf-8", errors="replace"), f"'{file_path.name}'")


class DocxExtractor(Extractor):
    """Joins the paragraphs of a Word document with newlines."""

    content_type = ContentType.WORD_DOCUMENT

    def accepts(self, mime_type: str) -> bool:
        return mime_type == DOCX_CONTENT_TYPE

    async def extract(self, file_path: Path, mime_type: str) -> str:
        try:
            document = docx.Document(str(file_path))
        except Exception as exc:
            raise ExtractionError(
                f"Failed to extract Word document text: {exc}"
            ) from exc
        text = "\n".join(p.text for p in document.paragraphs)
        return require_text(text, f"'{file_path.name}'")

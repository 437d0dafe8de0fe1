"""
tutor_api/extractor/pdf_extractor.py

PDF text extraction with PyMuPDF (fitz).

Responsibility: open the stored upload and return the text of every
non-blank page, joined in page order.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from tutor_api.core.constants import PDF_CONTENT_TYPE
from tutor_api.core.exceptions import ExtractionError
from tutor_api.core.logger import get_logger
from tutor_api.extractor.base import ContentType, Extractor

logger = get_logger(__name__)


class PDFExtractor(Extractor):
    """Extracts plain text from a PDF on disk."""

    content_type = ContentType.PDF

    def accepts(self, mime_type: str) -> bool:
        return mime_type == PDF_CONTENT_TYPE

    async def extract(self, file_path: Path, mime_type: str) -> str:
        """
        Parse a PDF and return the concatenated text of its non-blank pages.

        Raises:
            ExtractionError: If the file cannot be parsed as a PDF, text
                             extraction fails, or no page contains text.
        """
        name = file_path.name

        try:
            doc = fitz.open(str(file_path), filetype="pdf")
        except Exception as exc:
            raise ExtractionError(
                f"Failed to extract PDF text: '{name}' could not be opened as a PDF: {exc}"
            ) from exc

        try:
            with doc:
                total_pages = doc.page_count
                pages: List[str] = [
                    text
                    for text in (page.get_text("text") for page in doc)
                    if text.strip()
                ]
        except Exception as exc:
            raise ExtractionError(
                f"Failed to extract PDF text: extraction failed for '{name}': {exc}"
            ) from exc

        logger.info("PDF '%s': %d of %d page(s) had text.", name, len(pages), total_pages)

        if not pages:
            raise ExtractionError(
                f"'{name}' contains no extractable text; "
                "it may be a scanned or empty PDF."
            )

        return "\n".join(pages)

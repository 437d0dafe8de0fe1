"""
tests/extractor/test_content_extractor.py

Tests for ContentExtractor dispatch.
"""

from pathlib import Path

import pytest

from tutor_api.core.constants import ALLOWED_UPLOAD_CONTENT_TYPES
from tutor_api.core.exceptions import UnsupportedTypeError
from tutor_api.extractor.base import ContentType, ExtractionResult
from tutor_api.extractor.content_extractor import ContentExtractor, default_extractors


@pytest.fixture
def extractor(fake_gateway) -> ContentExtractor:
    return ContentExtractor(default_extractors(fake_gateway))


class TestDispatch:

    @pytest.mark.parametrize(
        "mime_type, expected",
        [
            ("application/pdf", ContentType.PDF),
            ("text/plain", ContentType.TEXT),
            (
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                ContentType.WORD_DOCUMENT,
            ),
            ("image/gif", ContentType.IMAGE_ANALYSIS),
            ("video/quicktime", ContentType.VIDEO_TRANSCRIPT),
            ("audio/wav", ContentType.AUDIO_TRANSCRIPT),
        ],
    )
    def test_mime_type_selects_strategy(self, extractor, mime_type, expected) -> None:
        assert extractor.select(mime_type).content_type is expected

    def test_every_allowed_upload_type_has_a_strategy(self, extractor) -> None:
        for mime_type in ALLOWED_UPLOAD_CONTENT_TYPES:
            extractor.select(mime_type)

    def test_unknown_type_raises(self, extractor) -> None:
        with pytest.raises(UnsupportedTypeError):
            extractor.select("application/zip")

    @pytest.mark.asyncio
    async def test_extract_returns_tagged_result(self, extractor, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("Hooke's law: F = kx")

        result = await extractor.extract(path, "text/plain")

        assert result == ExtractionResult(content_type=ContentType.TEXT, text="Hooke's law: F = kx")

    @pytest.mark.asyncio
    async def test_extract_unknown_type_raises(self, extractor, tmp_path: Path) -> None:
        path = tmp_path / "archive.zip"
        path.write_bytes(b"PK")

        with pytest.raises(UnsupportedTypeError):
            await extractor.extract(path, "application/zip")

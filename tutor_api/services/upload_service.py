"""
tutor_api/services/upload_service.py

Orchestrates the file-upload pipeline and the follow-up LLM calls on
uploaded material:

    UploadFile
      └─ validate MIME type + size        (400, nothing stored)
           └─ store as file-<uuid><ext>   → UploadedFile
                └─ ContentExtractor.extract() → ExtractionResult
                     └─ UploadResponse

The stored upload stays on disk; only derived artifacts (extracted audio)
are removed by the extractors.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

from tutor_api.core.config import settings
from tutor_api.core.constants import (
    ALLOWED_UPLOAD_CONTENT_TYPES,
    MAX_UPLOAD_SIZE_BYTES,
    STORED_FILE_PREFIX,
)
from tutor_api.core.exceptions import FileTooLargeError, InvalidFileTypeError
from tutor_api.core.logger import get_logger
from tutor_api.extractor.content_extractor import ContentExtractor, default_extractors
from tutor_api.llm.base import LLMGateway
from tutor_api.llm.openai_gateway import OpenAIGateway
from tutor_api.models.upload_models import (
    AnalyzeLectureRequest,
    AnalyzeLectureResponse,
    ExplainUploadRequest,
    ExplainUploadResponse,
    UploadResponse,
)
from tutor_api.prompts import templates
from tutor_api.prompts.composer import compose

logger = get_logger(__name__)

DEFAULT_LECTURE_TITLE = templates.ANALYZE_LECTURE.defaults["lecture_title"]


@dataclass(frozen=True)
class UploadedFile:
    """
    A validated upload that has been written to the upload directory.

    Attributes:
        original_name : Filename as sent by the client.
        stored_path   : Where the bytes now live.
        mime_type     : Declared content type.
        size_bytes    : Number of bytes written.
    """

    original_name: str
    stored_path: Path
    mime_type: str
    size_bytes: int

    @property
    def file_id(self) -> str:
        return self.stored_path.name


class UploadService:
    """
    Validates, stores and extracts uploaded study material.

    All collaborators are constructor-injected; the module-level singleton
    wires in the real extractors and the OpenAI gateway.
    """

    def __init__(
        self,
        extractor: ContentExtractor | None = None,
        gateway: LLMGateway | None = None,
        upload_dir: str | Path | None = None,
        max_bytes: int = MAX_UPLOAD_SIZE_BYTES,
    ) -> None:
        self._gateway: LLMGateway = gateway or OpenAIGateway()
        self._extractor: ContentExtractor = extractor or ContentExtractor(
            default_extractors(self._gateway)
        )
        self._upload_dir = Path(upload_dir or settings.upload_dir)
        self._max_bytes = max_bytes

    # ── Public API ─────────────────────────────────────────────────────────────

    async def process_upload(self, upload: UploadFile) -> UploadResponse:
        """
        Validate, store and extract a single uploaded file.

        Raises:
            InvalidFileTypeError : MIME type is not on the allow-list.
            FileTooLargeError    : The file exceeds the size limit.
            UnsupportedTypeError : No extractor handles the MIME type.
            ExtractionError      : Extraction failed.
        """
        stored = await self.store(upload)
        result = await self._extractor.extract(stored.stored_path, stored.mime_type)

        logger.info(
            "'%s' stored as '%s' — %d byte(s), %d character(s) extracted.",
            stored.original_name,
            stored.file_id,
            stored.size_bytes,
            len(result.text),
        )
        return UploadResponse(
            filename=stored.original_name,
            content_type=result.content_type.value,
            extracted_content=result.text,
            file_id=stored.file_id,
            size=stored.size_bytes,
        )

    async def store(self, upload: UploadFile) -> UploadedFile:
        """
        Check the upload against the allow-list and size limit, then write it
        under a generated name. Nothing touches the disk unless both pass.
        """
        original_name = upload.filename or "upload"
        mime_type = (upload.content_type or "").split(";")[0].strip().lower()

        if mime_type not in ALLOWED_UPLOAD_CONTENT_TYPES:
            raise InvalidFileTypeError(
                f"Unsupported file type: '{mime_type or 'unknown'}'"
            )

        declared_size = getattr(upload, "size", None)
        if isinstance(declared_size, int) and declared_size > self._max_bytes:
            raise FileTooLargeError(self._too_large_message(original_name))

        # One byte past the limit is enough to know it is too big.
        data = await upload.read(self._max_bytes + 1)
        if len(data) > self._max_bytes:
            raise FileTooLargeError(self._too_large_message(original_name))

        self._upload_dir.mkdir(parents=True, exist_ok=True)
        stored_path = self._upload_dir / (
            f"{STORED_FILE_PREFIX}{uuid4().hex}{Path(original_name).suffix.lower()}"
        )
        stored_path.write_bytes(data)

        return UploadedFile(
            original_name=original_name,
            stored_path=stored_path,
            mime_type=mime_type,
            size_bytes=len(data),
        )

    async def explain(self, request: ExplainUploadRequest) -> ExplainUploadResponse:
        """Explain previously extracted content."""
        prompt = compose(
            templates.EXPLAIN_UPLOAD,
            {
                "content": request.content,
                "content_type": request.content_type,
                "subject": request.subject,
                "context": request.context,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return ExplainUploadResponse(
            explanation=completion.text,
            content_type=request.content_type,
            processed=True,
        )

    async def analyze_lecture(self, request: AnalyzeLectureRequest) -> AnalyzeLectureResponse:
        """Turn a lecture transcript into a study guide."""
        prompt = compose(
            templates.ANALYZE_LECTURE,
            {
                "transcript": request.transcript,
                "subject": request.subject,
                "lecture_title": request.lecture_title,
            },
        )
        completion = await self._gateway.complete(
            prompt.system_message, prompt.user_message, prompt.options()
        )
        return AnalyzeLectureResponse(
            analysis=completion.text,
            subject=request.subject,
            lecture_title=request.lecture_title or DEFAULT_LECTURE_TITLE,
        )

    # ── Internals ──────────────────────────────────────────────────────────────

    def _too_large_message(self, filename: str) -> str:
        limit_mb = self._max_bytes / (1024 * 1024)
        return f"'{filename}' exceeds the {limit_mb:g} MB upload limit."


# ── Module-level singleton ─────────────────────────────────────────────────────

upload_service = UploadService()

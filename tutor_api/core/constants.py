"""
tutor_api/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.
"""

from typing import FrozenSet

# ── Uploads ────────────────────────────────────────────────────────────────────

#: Hard ceiling for a single uploaded file (50 MB).
MAX_UPLOAD_SIZE_BYTES: int = 50 * 1024 * 1024

#: Multipart field the client sends the file under.
UPLOAD_FIELD_NAME: str = "file"

#: Prefix of every generated upload name: file-<uuid hex><ext>.
STORED_FILE_PREFIX: str = "file-"

PDF_CONTENT_TYPE: str = "application/pdf"
TEXT_CONTENT_TYPE: str = "text/plain"
DOCX_CONTENT_TYPE: str = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

#: MIME types accepted by POST /api/upload/file. Every entry has an extractor.
ALLOWED_UPLOAD_CONTENT_TYPES: FrozenSet[str] = frozenset(
    {
        PDF_CONTENT_TYPE,
        TEXT_CONTENT_TYPE,
        DOCX_CONTENT_TYPE,
        "image/jpeg",
        "image/png",
        "image/gif",
        "video/mp4",
        "video/avi",
        "video/quicktime",
        "audio/mpeg",
        "audio/wav",
    }
)

# ── Calculator ─────────────────────────────────────────────────────────────────

#: Longest expression the calculator will parse.
MAX_EXPRESSION_LENGTH: int = 500

#: Largest number of digits any single power, exponential or factorial may
#: produce; larger ones are rejected before they are computed.
MAX_RESULT_DIGITS: int = 10_000

#: Largest n accepted by n! (2000! has 5736 digits).
MAX_FACTORIAL_ARGUMENT: int = 2_000

#: Integer results with more digits are returned in scientific notation.
MAX_EXACT_INTEGER_DIGITS: int = 1_000

"""
tutor_api/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from services lets controllers catch specific
cases and return the correct HTTP status code without leaking internals.
"""


class AppBaseException(Exception):
    """Root exception — catch-all for any application-level error."""


# ── Client errors (HTTP 400) ───────────────────────────────────────────────────

class InvalidRequestError(AppBaseException):
    """Base for errors caused by what the caller sent."""


class InvalidFileTypeError(InvalidRequestError):
    """Raised when an upload's MIME type is not on the allow-list."""


class FileTooLargeError(InvalidRequestError):
    """Raised when an upload exceeds the maximum size."""


class UnsupportedTypeError(InvalidRequestError):
    """Raised when no extractor can handle the given MIME type."""


class InvalidExpressionError(InvalidRequestError):
    """Raised when the calculator cannot parse or evaluate an expression."""


# ── Server errors (HTTP 500) ───────────────────────────────────────────────────

class UpstreamError(AppBaseException):
    """Raised when the completion, vision or speech-to-text API fails."""


class ExtractionError(AppBaseException):
    """Raised when text extraction fails for an uploaded file."""

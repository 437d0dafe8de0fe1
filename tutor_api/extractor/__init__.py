"""tutor_api/extractor/__init__.py — public API of the extractor package."""

from tutor_api.extractor.base import ContentType, ExtractionResult, Extractor
from tutor_api.extractor.content_extractor import ContentExtractor, default_extractors

__all__ = [
    "ContentType",
    "ExtractionResult",
    "Extractor",
    "ContentExtractor",
    "default_extractors",
]

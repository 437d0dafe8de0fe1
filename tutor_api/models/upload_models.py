"""
tutor_api/models/upload_models.py

Pydantic DTOs for the /api/upload flow.
The file upload has no request DTO — the controller parses the multipart
form itself; only the response shape is defined for it.
"""

from typing import Optional

from tutor_api.models.base import CamelModel, NonBlankStr


class UploadResponse(CamelModel):
    """
    Successful response for POST /api/upload/file.

        {
            "filename": "lecture-notes.pdf",
            "contentType": "PDF document",
            "extractedContent": "...",
            "fileId": "file-3f2a...e1.pdf",
            "size": 48213
        }
    """

    filename: str
    content_type: str
    extracted_content: str
    file_id: str
    size: int


class ExplainUploadRequest(CamelModel):
    """JSON body for POST /api/upload/explain."""

    content: NonBlankStr
    content_type: str = "uploaded"
    context: Optional[str] = None
    subject: Optional[str] = None


class ExplainUploadResponse(CamelModel):
    explanation: str
    content_type: str
    processed: bool = True


class AnalyzeLectureRequest(CamelModel):
    """JSON body for POST /api/upload/analyze-lecture."""

    transcript: NonBlankStr
    subject: Optional[str] = None
    lecture_title: Optional[str] = None


class AnalyzeLectureResponse(CamelModel):
    analysis: str
    subject: Optional[str] = None
    lecture_title: str

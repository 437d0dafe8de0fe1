"""
tutor_api/models/tutor_models.py

Pydantic DTOs for the /api/tutor flow — request bodies and responses.
"""

from typing import Any, Dict, Optional

from tutor_api.models.base import CamelModel, NonBlankStr


class ChatRequest(CamelModel):
    """
    JSON body for POST /api/tutor/chat.

        { "message": "What is a moment?", "subject": "Statics" }
    """

    message: NonBlankStr
    context: Optional[str] = None
    subject: Optional[str] = None


class ChatResponse(CamelModel):
    response: str
    usage: Optional[Dict[str, Any]] = None


class SubjectHelpRequest(CamelModel):
    """
    JSON body for POST /api/tutor/subject-help.

        { "subject": "Thermodynamics", "topic": "Entropy", "level": "beginner" }
    """

    subject: NonBlankStr
    topic: NonBlankStr
    level: str = "beginner"


class SubjectHelpResponse(CamelModel):
    response: str
    subject: str
    topic: str
    level: str


class ExplainContentRequest(CamelModel):
    """JSON body for POST /api/tutor/explain-content."""

    content: NonBlankStr
    content_type: str = "uploaded"
    context: Optional[str] = None


class ExplainContentResponse(CamelModel):
    explanation: str
    content_type: str

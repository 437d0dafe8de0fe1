"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest — no import needed.
"""

import io
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Point file-system settings at throwaway directories before the app (and
# its settings singleton) is imported.
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="tutor-uploads-"))
os.environ.setdefault("CLIENT_DIR", tempfile.mkdtemp(prefix="tutor-client-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tutor_api.llm.base import Completion  # noqa: E402
from tutor_api.main import app  # noqa: E402


# ── Core client fixture ────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    A synchronous TestClient wrapping the FastAPI app.

    session-scoped so the app is instantiated once per test run.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ── Gateway fixture ────────────────────────────────────────────────────────────

@pytest.fixture
def fake_gateway() -> MagicMock:
    """
    An LLMGateway stand-in. complete() answers "AI answer"; describe_image()
    and transcribe() return canned text.
    """
    gateway = MagicMock()
    gateway.complete = AsyncMock(
        return_value=Completion(
            text="AI answer",
            usage={"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
        )
    )
    gateway.describe_image = AsyncMock(return_value="A free body diagram of a beam.")
    gateway.transcribe = AsyncMock(return_value="Today we cover entropy.")
    return gateway


# ── Sample file fixtures ───────────────────────────────────────────────────────

@pytest.fixture
def sample_txt_file() -> tuple:
    """
    A (field_name, (filename, file_obj, content_type)) tuple ready for
    use with TestClient's `files=` parameter.
    """
    return ("file", ("notes.txt", io.BytesIO(b"F = m * a"), "text/plain"))


@pytest.fixture
def sample_exe_file() -> tuple:
    """A disallowed upload tuple for negative-case tests."""
    return ("file", ("setup.exe", io.BytesIO(b"MZ\x90\x00"), "application/x-msdownload"))

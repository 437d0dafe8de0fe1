"""
tutor_api/extractor/media_extractor.py

Image, audio and video extraction. All three delegate the actual
understanding to the LLM gateway:

    image/*  ─ LLMGateway.describe_image()
    audio/*  ─ LLMGateway.transcribe()
    video/*  ─ ffmpeg (audio track → <stem>.mp3)
                 └─ LLMGateway.transcribe()
                      └─ temporary .mp3 removed on every exit path
"""

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path
from typing import Callable

from imageio_ffmpeg import get_ffmpeg_exe

from tutor_api.core.exceptions import ExtractionError, UpstreamError
from tutor_api.core.logger import get_logger
from tutor_api.extractor.base import ContentType, PrefixExtractor, require_text
from tutor_api.llm.base import LLMGateway

logger = get_logger(__name__)

IMAGE_ANALYSIS_INSTRUCTION = (
    "Analyze this image and extract any text, equations, diagrams, or "
    "educational content. Describe what you see in detail, especially any "
    "engineering or mathematical content."
)

IMAGE_ANALYSIS_MAX_TOKENS = 2000


# ── ffmpeg ─────────────────────────────────────────────────────────────────────

def extract_audio_track(video_path: Path, audio_path: Path) -> Path:
    """
    Demux the audio track of ``video_path`` into an MP3 at ``audio_path``.

    Blocking; callers run it in a worker thread.

    Raises:
        ExtractionError: If ffmpeg exits non-zero.
    """
    try:
        ffmpeg = get_ffmpeg_exe()
    except RuntimeError as exc:
        raise ExtractionError(f"Failed to extract audio from video: {exc}") from exc

    cmd = [
        ffmpeg,
        "-y",
        "-i", str(video_path),
        "-vn",
        "-acodec", "libmp3lame",
        str(audio_path),
    ]
    try:
        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except OSError as exc:
        raise ExtractionError(f"Failed to extract audio from video: {exc}") from exc
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise ExtractionError(
            f"Failed to extract audio from video: {stderr[-500:] or 'ffmpeg failed'}"
        )
    return audio_path


# ── Strategies ─────────────────────────────────────────────────────────────────

class ImageExtractor(PrefixExtractor):
    """Sends the image to a vision model and returns its description."""

    content_type = ContentType.IMAGE_ANALYSIS
    mime_prefix = "image/"

    def __init__(self, gateway: LLMGateway) -> None:
        self._gateway = gateway

    async def extract(self, file_path: Path, mime_type: str) -> str:
        try:
            image_bytes = file_path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Failed to read image: {exc}") from exc

        try:
            description = await self._gateway.describe_image(
                image_bytes,
                mime_type,
                IMAGE_ANALYSIS_INSTRUCTION,
                max_tokens=IMAGE_ANALYSIS_MAX_TOKENS,
            )
        except UpstreamError as exc:
            raise ExtractionError(f"Failed to analyze image: {exc}") from exc

        return require_text(description, f"image '{file_path.name}'")


class AudioExtractor(PrefixExtractor):
    """Transcribes the audio file directly."""

    content_type = ContentType.AUDIO_TRANSCRIPT
    mime_prefix = "audio/"

    def __init__(self, gateway: LLMGateway) -> None:
        self._gateway = gateway

    async def extract(self, file_path: Path, mime_type: str) -> str:
        return await transcribe_file(self._gateway, file_path)


class VideoExtractor(PrefixExtractor):
    """
    Pulls the audio track out of a video and transcribes it.

    The intermediate MP3 lives next to the upload as ``<stem>.mp3`` and is
    deleted whether transcription succeeds or fails.
    """

    content_type = ContentType.VIDEO_TRANSCRIPT
    mime_prefix = "video/"

    def __init__(
        self,
        gateway: LLMGateway,
        demuxer: Callable[[Path, Path], Path] = extract_audio_track,
    ) -> None:
        """
        Args:
            gateway : Used for speech-to-text.
            demuxer : Blocking ``(video_path, audio_path) -> audio_path``
                      callable. Defaults to ffmpeg.
        """
        self._gateway = gateway
        self._demuxer = demuxer

    async def extract(self, file_path: Path, mime_type: str) -> str:
        audio_path = file_path.with_suffix(".mp3")
        if audio_path == file_path:
            audio_path = file_path.with_name(f"{file_path.stem}.audio.mp3")
        try:
            await asyncio.to_thread(self._demuxer, file_path, audio_path)
            return await transcribe_file(self._gateway, audio_path)
        finally:
            if audio_path.exists():
                audio_path.unlink()
                logger.debug("Removed temporary audio '%s'.", audio_path.name)


async def transcribe_file(gateway: LLMGateway, audio_path: Path) -> str:
    """Run speech-to-text on ``audio_path``, mapping failures to ExtractionError."""
    try:
        text = await gateway.transcribe(audio_path)
    except UpstreamError as exc:
        raise ExtractionError(f"Failed to transcribe audio: {exc}") from exc
    return require_text(text, f"audio '{audio_path.name}'")

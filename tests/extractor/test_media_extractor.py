"""
tests/extractor/test_media_extractor.py

Tests for ImageExtractor, AudioExtractor and VideoExtractor.

The gateway is a mock. ffmpeg is either replaced by a demuxer stub that
writes a placeholder MP3, or reached through a patched subprocess.run,
so these tests never spawn a process.
"""

import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from tutor_api.core.exceptions import ExtractionError, UpstreamError
from tutor_api.extractor import media_extractor
from tutor_api.extractor.media_extractor import (
    IMAGE_ANALYSIS_INSTRUCTION,
    AudioExtractor,
    ImageExtractor,
    VideoExtractor,
    extract_audio_track,
)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _fake_demuxer(video_path: Path, audio_path: Path) -> Path:
    audio_path.write_bytes(b"ID3 fake mp3")
    return audio_path


def _failing_demuxer(video_path: Path, audio_path: Path) -> Path:
    audio_path.write_bytes(b"partial")
    raise ExtractionError("Failed to extract audio from video: corrupt stream")


@pytest.fixture
def video(tmp_path: Path) -> Path:
    path = tmp_path / "file-abc.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


# ── Image ──────────────────────────────────────────────────────────────────────

class TestImageExtractor:

    def test_accepts_any_image(self, fake_gateway) -> None:
        extractor = ImageExtractor(fake_gateway)
        assert extractor.accepts("image/png")
        assert extractor.accepts("image/gif")
        assert not extractor.accepts("video/mp4")

    @pytest.mark.asyncio
    async def test_sends_bytes_mime_and_instruction(self, fake_gateway, tmp_path: Path) -> None:
        path = tmp_path / "beam.jpg"
        path.write_bytes(b"\xff\xd8\xff jpeg")

        text = await ImageExtractor(fake_gateway).extract(path, "image/jpeg")

        assert text == "A free body diagram of a beam."
        args = fake_gateway.describe_image.await_args.args
        assert args == (b"\xff\xd8\xff jpeg", "image/jpeg", IMAGE_ANALYSIS_INSTRUCTION)

    @pytest.mark.asyncio
    async def test_upstream_failure_becomes_extraction_error(self, fake_gateway, tmp_path: Path) -> None:
        path = tmp_path / "beam.png"
        path.write_bytes(b"png")
        fake_gateway.describe_image = AsyncMock(side_effect=UpstreamError("vision down"))

        with pytest.raises(ExtractionError, match="Failed to analyze image"):
            await ImageExtractor(fake_gateway).extract(path, "image/png")


# ── Audio ──────────────────────────────────────────────────────────────────────

class TestAudioExtractor:

    @pytest.mark.asyncio
    async def test_transcribes_file_directly(self, fake_gateway, tmp_path: Path) -> None:
        path = tmp_path / "lecture.mp3"
        path.write_bytes(b"ID3")

        text = await AudioExtractor(fake_gateway).extract(path, "audio/mpeg")

        assert text == "Today we cover entropy."
        fake_gateway.transcribe.assert_awaited_once_with(path)

    @pytest.mark.asyncio
    async def test_empty_transcript_raises(self, fake_gateway, tmp_path: Path) -> None:
        path = tmp_path / "silence.wav"
        path.write_bytes(b"RIFF")
        fake_gateway.transcribe = AsyncMock(return_value="  ")

        with pytest.raises(ExtractionError):
            await AudioExtractor(fake_gateway).extract(path, "audio/wav")


# ── Video ──────────────────────────────────────────────────────────────────────

class TestVideoExtractor:

    @pytest.mark.asyncio
    async def test_transcribes_extracted_audio(self, fake_gateway, video: Path) -> None:
        extractor = VideoExtractor(fake_gateway, demuxer=_fake_demuxer)

        text = await extractor.extract(video, "video/mp4")

        assert text == "Today we cover entropy."
        fake_gateway.transcribe.assert_awaited_once_with(video.with_suffix(".mp3"))

    @pytest.mark.asyncio
    async def test_audio_removed_after_success(self, fake_gateway, video: Path) -> None:
        await VideoExtractor(fake_gateway, demuxer=_fake_demuxer).extract(video, "video/mp4")

        assert not video.with_suffix(".mp3").exists()
        assert video.exists()  # the upload itself is kept

    @pytest.mark.asyncio
    async def test_audio_removed_when_transcription_fails(self, fake_gateway, video: Path) -> None:
        fake_gateway.transcribe = AsyncMock(side_effect=UpstreamError("whisper 503"))
        extractor = VideoExtractor(fake_gateway, demuxer=_fake_demuxer)

        with pytest.raises(ExtractionError, match="Failed to transcribe audio"):
            await extractor.extract(video, "video/mp4")

        assert not video.with_suffix(".mp3").exists()

    @pytest.mark.asyncio
    async def test_audio_removed_when_demux_fails(self, fake_gateway, video: Path) -> None:
        extractor = VideoExtractor(fake_gateway, demuxer=_failing_demuxer)

        with pytest.raises(ExtractionError, match="corrupt stream"):
            await extractor.extract(video, "video/mp4")

        assert not video.with_suffix(".mp3").exists()
        fake_gateway.transcribe.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mp3_named_video_does_not_clobber_upload(self, fake_gateway, tmp_path: Path) -> None:
        upload = tmp_path / "file-xyz.mp3"
        upload.write_bytes(b"video bytes")
        demuxer = MagicMock(side_effect=_fake_demuxer)

        await VideoExtractor(fake_gateway, demuxer=demuxer).extract(upload, "video/mp4")

        audio_path = demuxer.call_args.args[1]
        assert audio_path != upload
        assert upload.exists()
        assert not audio_path.exists()


# ── ffmpeg demuxer ─────────────────────────────────────────────────────────────

FFMPEG = "/opt/ffmpeg/bin/ffmpeg"


class _FakeRun:
    """Stands in for subprocess.run and records the argv it was given."""

    def __init__(self, returncode: int = 0, stderr: bytes = b"") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list = []

    def __call__(self, cmd, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(cmd)
        if self.returncode == 0:
            Path(cmd[-1]).write_bytes(b"ID3 demuxed")
        return subprocess.CompletedProcess(cmd, self.returncode, b"", self.stderr)


@pytest.fixture
def ffmpeg(monkeypatch) -> None:
    monkeypatch.setattr(media_extractor, "get_ffmpeg_exe", lambda: FFMPEG)


class TestExtractAudioTrack:

    def test_ffmpeg_command_line(self, ffmpeg, monkeypatch, video: Path) -> None:
        run = _FakeRun()
        monkeypatch.setattr(media_extractor.subprocess, "run", run)
        audio = video.with_suffix(".mp3")

        result = extract_audio_track(video, audio)

        assert result == audio
        assert run.calls == [
            [FFMPEG, "-y", "-i", str(video), "-vn", "-acodec", "libmp3lame", str(audio)]
        ]

    def test_non_zero_exit_raises_with_stderr_tail(
        self, ffmpeg, monkeypatch, video: Path
    ) -> None:
        stderr = b"ffmpeg version 6.0\n" + b"x" * 2000 + b"\nInvalid data found\n"
        run = _FakeRun(returncode=1, stderr=stderr)
        monkeypatch.setattr(media_extractor.subprocess, "run", run)

        with pytest.raises(ExtractionError, match="Invalid data found") as info:
            extract_audio_track(video, video.with_suffix(".mp3"))

        message = str(info.value)
        assert message.startswith("Failed to extract audio from video: ")
        assert "ffmpeg version" not in message

    def test_non_zero_exit_without_stderr(self, ffmpeg, monkeypatch, video: Path) -> None:
        monkeypatch.setattr(media_extractor.subprocess, "run", _FakeRun(returncode=1))

        with pytest.raises(ExtractionError, match="ffmpeg failed"):
            extract_audio_track(video, video.with_suffix(".mp3"))

    def test_missing_binary_raises(self, ffmpeg, monkeypatch, video: Path) -> None:
        def _not_found(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        monkeypatch.setattr(media_extractor.subprocess, "run", _not_found)

        with pytest.raises(ExtractionError, match="No such file or directory"):
            extract_audio_track(video, video.with_suffix(".mp3"))

    def test_unavailable_ffmpeg_raises(self, monkeypatch, video: Path) -> None:
        def _no_ffmpeg():
            raise RuntimeError("No ffmpeg exe could be found.")

        monkeypatch.setattr(media_extractor, "get_ffmpeg_exe", _no_ffmpeg)

        with pytest.raises(ExtractionError, match="No ffmpeg exe"):
            extract_audio_track(video, video.with_suffix(".mp3"))

    @pytest.mark.asyncio
    async def test_video_extractor_uses_ffmpeg_by_default(
        self, ffmpeg, monkeypatch, fake_gateway, video: Path
    ) -> None:
        run = _FakeRun()
        monkeypatch.setattr(media_extractor.subprocess, "run", run)

        text = await VideoExtractor(fake_gateway).extract(video, "video/mp4")

        assert text == "Today we cover entropy."
        audio = video.with_suffix(".mp3")
        assert run.calls[0][-1] == str(audio)
        fake_gateway.transcribe.assert_awaited_once_with(audio)
        assert not audio.exists()

"""Shared pytest fixtures for the raven-extract test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from raven_extract.interfaces.pdf_text_provider import IPDFTextProvider
from raven_extract.interfaces.video_audio_provider import IVideoAudioProvider
from raven_extract.models.file_record import FileRecord
from raven_extract.services.image_text_service import ImageTextService
from raven_extract.services.text_extraction_service import TextExtractionService
from raven_extract.services.transcription_service import TranscriptionService


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Capability doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def image_text() -> MagicMock:
    """Image text capability returning ``None`` unless a test says otherwise."""
    mock = MagicMock(spec=ImageTextService)
    mock.extract_text = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def pdf_text() -> MagicMock:
    mock = MagicMock(spec=IPDFTextProvider)
    mock.get_provider_name.return_value = "fake-pdf"
    mock.extract_text = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def transcriber() -> MagicMock:
    mock = MagicMock(spec=TranscriptionService)
    mock.transcribe = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def video_audio() -> MagicMock:
    mock = MagicMock(spec=IVideoAudioProvider)
    mock.get_provider_name.return_value = "fake-ffmpeg"
    mock.extract_audio = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def service(image_text, pdf_text, transcriber, video_audio) -> TextExtractionService:
    """Sequential dispatcher wired to the capability doubles."""
    return TextExtractionService(
        image_text=image_text,
        pdf_text=pdf_text,
        transcriber=transcriber,
        video_audio=video_audio,
    )


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def make_record(tmp_path: Path):
    """Factory for FileRecords under ``tmp_path``.

    ``content`` (str or bytes) is written to disk when given; otherwise the
    path is left nonexistent, which is fine for mocked capabilities.
    """

    def _make(name: str, file_type: str | None = None, content: str | bytes | None = None) -> FileRecord:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif content is not None:
            path.write_text(content, encoding="utf-8")
        tag = file_type if file_type is not None else path.suffix.lstrip(".")
        return FileRecord(name=name, file_type=tag, path=path)

    return _make


@pytest.fixture
def temp_audio(tmp_path: Path) -> Path:
    """A stand-in for the intermediate WAV produced from a video."""
    path = tmp_path / "intermediate.wav"
    path.write_bytes(b"RIFF....WAVE")
    return path

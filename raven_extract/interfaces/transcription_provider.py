"""Abstract base class for audio transcription providers.

# ─── ADAPTER PATTERN ───────────────────────────────────────────────────
#
# ITranscriptionProvider wraps a specific speech-to-text backend
# (faster-whisper locally, the OpenAI Whisper API) behind one interface
# so TranscriptionService never needs to know which backend is in use.
#
# Both audio files and the WAV track pulled out of a video go through the
# same provider, so a provider only ever sees audio.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field


class TranscriptionResult(BaseModel):
    """Immutable result from an audio transcription."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Full transcribed text.")
    language: str = Field(default="en", description="Detected or specified language code.")
    duration_seconds: float = Field(default=0.0, description="Audio duration in seconds.")
    segments: list[dict[str, float | str]] = Field(
        default_factory=list,
        description="Segment-level data: [{'start': 0.0, 'end': 2.5, 'text': '...'}]",
    )


class ITranscriptionProvider(ABC):
    """Contract for audio transcription backends."""

    @abstractmethod
    async def transcribe(
        self,
        audio_path: str,
        language: str | None = None,
    ) -> TranscriptionResult:
        """Transcribe an audio file to text.

        Parameters
        ----------
        audio_path:
            Path to the audio file on disk.
        language:
            Optional ISO 639-1 language code (e.g. "en", "de").  ``None``
            lets the backend auto-detect.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable name for this provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the provider is ready to accept transcription requests."""

    @abstractmethod
    def supported_formats(self) -> list[str]:
        """Return supported audio file extensions (e.g. ['.wav', '.mp3'])."""

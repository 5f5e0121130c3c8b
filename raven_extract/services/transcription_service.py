"""Audio transcription facade.

# ─── DESIGN ────────────────────────────────────────────────────────────
#
# TranscriptionService sits between the extraction dispatcher and the
# transcription providers.  It handles:
#   1. Provider selection (local Whisper vs. API, from settings)
#   2. Format conversion to WAV via pydub/ffmpeg when the provider cannot
#      read the input directly (the WAV is removed afterwards)
#   3. Reducing the provider result to the plain transcript text
#
# Pattern: Facade (wraps provider complexity behind a simple interface).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from raven_extract.config.settings import Settings
from raven_extract.interfaces.transcription_provider import ITranscriptionProvider
from raven_extract.utils.errors import (
    ConfigurationError,
    ProviderUnavailableError,
    RavenExtractError,
    TranscriptionError,
)
from raven_extract.utils.logging import get_logger
from raven_extract.utils.temp_files import new_temp_path, remove_quietly, removing

logger = get_logger(__name__)


class TranscriptionService:
    """Transcription capability used by the extraction dispatcher.

    Parameters
    ----------
    provider:
        The speech-to-text backend.
    language:
        Optional ISO 639-1 code passed to every call.  ``None`` auto-detects.
    """

    def __init__(self, provider: ITranscriptionProvider, language: str | None = None) -> None:
        self._provider = provider
        self._language = language or None

    @classmethod
    def from_settings(cls, settings: Settings, provider_name: str | None = None) -> TranscriptionService:
        """Build the service with the provider named in *settings*."""
        name = provider_name or settings.transcription_provider
        return cls(
            provider=_build_provider(name, settings),
            language=settings.transcription_language or None,
        )

    @property
    def provider(self) -> ITranscriptionProvider:
        return self._provider

    async def transcribe(self, audio_path: Path, file_type: str | None = None) -> str | None:
        """Return the transcript of *audio_path*, or ``None`` if it is silent.

        *file_type* is the declared type tag (``"mp3"``, ``"AIFF"``).  It
        decides whether the provider can read the file directly; the path
        suffix is only consulted when no tag is given.

        Raises
        ------
        TranscriptionError
            If the provider fails.
        """
        path = Path(audio_path)
        tag = file_type if file_type is not None else path.suffix.lstrip(".")

        if f".{tag.lower()}" in self._provider.supported_formats():
            return await self._transcribe(path)

        wav_path = await self._convert_to_wav(path)
        async with removing(wav_path):
            return await self._transcribe(wav_path)

    async def _transcribe(self, path: Path) -> str | None:
        name = self._provider.get_provider_name()
        try:
            result = await self._provider.transcribe(str(path), language=self._language)
        except RavenExtractError:
            raise
        except Exception as exc:
            raise TranscriptionError(
                f"Transcription of {path.name} failed: {exc}",
                provider_name=name,
            ) from exc

        text = result.text.strip()
        logger.info(
            "audio_transcribed",
            provider=name,
            path=str(path),
            characters=len(text),
            duration=result.duration_seconds,
        )
        return text or None

    @staticmethod
    async def _convert_to_wav(audio_path: Path) -> Path:
        """Convert audio to a temporary WAV using pydub (requires ffmpeg)."""
        if not shutil.which("ffmpeg"):
            raise ProviderUnavailableError(
                "ffmpeg not installed. Install via: brew install ffmpeg "
                "(macOS) or apt install ffmpeg (Linux)",
                provider_name="pydub",
            )

        from pydub import AudioSegment

        wav_path = new_temp_path(".wav")

        def _export() -> None:
            audio = AudioSegment.from_file(str(audio_path))
            audio.export(str(wav_path), format="wav")

        try:
            await asyncio.to_thread(_export)
        except asyncio.CancelledError:
            remove_quietly(wav_path)
            raise
        except Exception as exc:
            remove_quietly(wav_path)
            raise TranscriptionError(
                f"Could not convert {audio_path.name} to WAV: {exc}",
                provider_name="pydub",
            ) from exc

        logger.info("audio_converted_to_wav", source=str(audio_path), output=str(wav_path))
        return wav_path


def _build_provider(name: str, settings: Settings) -> ITranscriptionProvider:
    """Instantiate the requested transcription provider."""
    if name == "whisper_api":
        from raven_extract.providers.transcription.whisper_api_provider import (
            WhisperAPIProvider,
        )

        if not settings.openai_api_key:
            raise ConfigurationError(
                "OpenAI API key required for Whisper API provider",
                provider_name="whisper_api",
            )
        return WhisperAPIProvider(api_key=settings.openai_api_key)

    if name == "whisper_local":
        from raven_extract.providers.transcription.whisper_local_provider import (
            WhisperLocalProvider,
        )

        return WhisperLocalProvider(
            model_size=settings.whisper_model_size,
            device=settings.whisper_device,
            compute_type=settings.whisper_compute_type,
        )

    raise ConfigurationError(f"Unknown transcription provider: {name}")

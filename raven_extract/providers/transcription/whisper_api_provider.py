"""OpenAI Whisper API transcription provider.

# ─── CLOUD TRANSCRIPTION ────────────────────────────────────────────
#
# Cloud option for machines that cannot hold a local model.
#
# Max file size: 25 MB per request.
# Supported formats: mp3, mp4, mpeg, mpga, m4a, wav, webm.  Anything else
# (AIFF in particular) is converted to WAV by TranscriptionService first.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path

from raven_extract.interfaces.transcription_provider import (
    ITranscriptionProvider,
    TranscriptionResult,
)
from raven_extract.utils.logging import get_logger

logger = get_logger(__name__)


def _segment_field(seg: object, name: str, default: float | str) -> float | str:
    if isinstance(seg, dict):
        return seg.get(name, default)
    return getattr(seg, name, default)


class WhisperAPIProvider(ITranscriptionProvider):
    """Transcription via the OpenAI Whisper API.

    Parameters
    ----------
    api_key:
        OpenAI API key.  Required for authentication.
    model:
        Transcription model name.
    """

    def __init__(self, api_key: str, model: str = "whisper-1") -> None:
        self._api_key = api_key
        self._model = model

    async def transcribe(
        self,
        audio_path: str,
        language: str | None = None,
    ) -> TranscriptionResult:
        """Transcribe audio using the OpenAI Whisper API."""
        # Deferred import -- only load openai when actually transcribing.
        from openai import AsyncOpenAI

        async with AsyncOpenAI(api_key=self._api_key) as client:
            with open(Path(audio_path), "rb") as f:
                kwargs = {
                    "model": self._model,
                    "file": f,
                    "response_format": "verbose_json",
                }
                if language:
                    kwargs["language"] = language

                response = await client.audio.transcriptions.create(**kwargs)

        segments = []
        for seg in getattr(response, "segments", None) or []:
            segments.append({
                "start": _segment_field(seg, "start", 0.0),
                "end": _segment_field(seg, "end", 0.0),
                "text": str(_segment_field(seg, "text", "")).strip(),
            })

        duration = getattr(response, "duration", 0.0) or 0.0
        detected_language = getattr(response, "language", None) or language or "en"

        logger.info(
            "whisper_api_transcription_complete",
            duration=duration,
            language=detected_language,
            segments=len(segments),
        )

        return TranscriptionResult(
            text=response.text.strip(),
            language=detected_language,
            duration_seconds=duration,
            segments=segments,
        )

    def get_provider_name(self) -> str:
        return "whisper_api (OpenAI)"

    def is_available(self) -> bool:
        """Available if openai SDK is installed and API key is set."""
        if not self._api_key:
            return False
        try:
            import openai  # noqa: F401
            return True
        except ImportError:
            return False

    def supported_formats(self) -> list[str]:
        return [".mp3", ".mp4", ".mpeg", ".mpga", ".m4a", ".wav", ".webm"]

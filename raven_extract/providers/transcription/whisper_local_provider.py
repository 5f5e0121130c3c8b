"""Local Whisper transcription provider using faster-whisper (CTranslate2).

# ─── LOCAL TRANSCRIPTION ─────────────────────────────────────────────
#
# faster-whisper runs Whisper on CTranslate2: faster than the reference
# implementation, less RAM, no API costs, and audio never leaves the
# machine.  It decodes input through PyAV, so any container ffmpeg
# understands (including AIFF) can be passed straight in.
#
# Model sizes and approximate requirements:
#   tiny   -- ~75 MB RAM, fast, lower accuracy
#   base   -- ~150 MB RAM, good balance (default)
#   small  -- ~500 MB RAM, better accuracy
#   medium -- ~1.5 GB RAM, near-large accuracy
#   large-v3 -- ~3 GB RAM, best accuracy
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import threading

from raven_extract.interfaces.transcription_provider import (
    ITranscriptionProvider,
    TranscriptionResult,
)
from raven_extract.utils.logging import get_logger

logger = get_logger(__name__)


class WhisperLocalProvider(ITranscriptionProvider):
    """Transcription via faster-whisper running locally on CPU/GPU.

    Parameters
    ----------
    model_size:
        Whisper model variant: tiny, base, small, medium, large-v2, large-v3.
    device:
        Compute device: "cpu", "cuda" or "auto".
    compute_type:
        CTranslate2 compute type: "int8" (fast/low RAM), "float16" (GPU),
        "float32" (CPU accurate).
    """

    def __init__(
        self,
        model_size: str = "base",
        device: str = "cpu",
        compute_type: str = "int8",
    ) -> None:
        self._model_size = model_size
        self._device = device
        self._compute_type = compute_type
        self._model = None
        # Concurrent batch workers must not load the model twice.
        self._model_lock = threading.Lock()

    def _ensure_model(self) -> None:
        """Lazy-load the model on first use to avoid startup RAM overhead."""
        with self._model_lock:
            if self._model is not None:
                return

            from faster_whisper import WhisperModel

            self._model = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
            logger.info(
                "whisper_model_loaded",
                model=self._model_size,
                device=self._device,
            )

    async def transcribe(
        self,
        audio_path: str,
        language: str | None = None,
    ) -> TranscriptionResult:
        """Transcribe audio using faster-whisper in a worker thread."""
        return await asyncio.to_thread(self._transcribe_sync, str(audio_path), language)

    def _transcribe_sync(self, audio_path: str, language: str | None) -> TranscriptionResult:
        self._ensure_model()
        assert self._model is not None

        kwargs = {"beam_size": 5}
        if language:
            kwargs["language"] = language

        segments_iter, info = self._model.transcribe(audio_path, **kwargs)

        # The segment generator does the actual decoding as it is consumed.
        segments = []
        full_text_parts = []
        for seg in segments_iter:
            text = seg.text.strip()
            segments.append({
                "start": seg.start,
                "end": seg.end,
                "text": text,
            })
            if text:
                full_text_parts.append(text)

        logger.info(
            "whisper_local_transcription_complete",
            duration=info.duration,
            language=info.language,
            segments=len(segments),
        )

        return TranscriptionResult(
            text=" ".join(full_text_parts),
            language=info.language or "en",
            duration_seconds=info.duration,
            segments=segments,
        )

    def get_provider_name(self) -> str:
        return f"whisper_local ({self._model_size})"

    def is_available(self) -> bool:
        """Check if faster-whisper is importable."""
        try:
            import faster_whisper  # noqa: F401
            return True
        except ImportError:
            return False

    def supported_formats(self) -> list[str]:
        return [".wav", ".mp3", ".flac", ".m4a", ".aiff", ".ogg", ".webm"]

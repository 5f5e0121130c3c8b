"""Capability interfaces consumed by the extraction dispatcher.

Every extraction engine is reached only through these abstract base
classes.  Concrete adapters live in ``raven_extract/providers/`` and are
wired together in ``raven_extract/main.py``, so tests can inject fakes and
a backend can be swapped without touching the dispatcher.

    Interface                 →  Concrete implementations
    ─────────────────────────────────────────────────────────
    IImageTextProvider        →  TesseractOCRProvider, EasyOCRProvider
    IPDFTextProvider          →  PyMuPDFTextProvider
    ITranscriptionProvider    →  WhisperLocalProvider, WhisperAPIProvider
    IVideoAudioProvider       →  FFmpegAudioExtractor
"""

from raven_extract.interfaces.image_text_provider import IImageTextProvider, OCRResult
from raven_extract.interfaces.pdf_text_provider import IPDFTextProvider
from raven_extract.interfaces.transcription_provider import (
    ITranscriptionProvider,
    TranscriptionResult,
)
from raven_extract.interfaces.video_audio_provider import IVideoAudioProvider

__all__ = [
    "IImageTextProvider",
    "IPDFTextProvider",
    "ITranscriptionProvider",
    "IVideoAudioProvider",
    "OCRResult",
    "TranscriptionResult",
]

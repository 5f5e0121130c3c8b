"""Composition root for raven-extract.

Wires every provider and service from :class:`Settings` and the YAML
config, and exposes :func:`extract_text_from_files` for callers that just
want the joined text of a batch.
"""

from __future__ import annotations

from typing import Any, Sequence

from raven_extract.config.loader import load_config
from raven_extract.config.settings import Settings
from raven_extract.interfaces.image_text_provider import IImageTextProvider
from raven_extract.models.file_record import FileRecord
from raven_extract.providers.ocr.easyocr_provider import EasyOCRProvider
from raven_extract.providers.ocr.tesseract_provider import TesseractOCRProvider
from raven_extract.providers.pdf.pymupdf_provider import PyMuPDFTextProvider
from raven_extract.providers.video.ffmpeg_provider import FFmpegAudioExtractor
from raven_extract.services.image_text_service import ImageTextService
from raven_extract.services.text_extraction_service import TextExtractionService
from raven_extract.services.transcription_service import TranscriptionService
from raven_extract.utils.errors import ConfigurationError
from raven_extract.utils.logging import get_logger

_logger = get_logger(__name__)


def _build_ocr_providers(settings: Settings, config: dict[str, Any]) -> list[IImageTextProvider]:
    """Instantiate OCR providers in ``ocr.provider_priority`` order."""
    priority = config.get("ocr", {}).get("provider_priority", ["tesseract"])
    providers: list[IImageTextProvider] = []
    for name in priority:
        if name == "tesseract":
            providers.append(TesseractOCRProvider(languages=settings.ocr_languages))
        elif name == "easyocr":
            # EasyOCR pulls in PyTorch; only used when explicitly enabled.
            if settings.easyocr_enabled:
                providers.append(EasyOCRProvider(languages=settings.easyocr_languages))
        else:
            raise ConfigurationError(f"Unknown OCR provider in config: {name}")
    if not providers:
        raise ConfigurationError("No OCR provider configured")
    return providers


def build_text_extraction_service(
    settings: Settings | None = None,
    config: dict[str, Any] | None = None,
) -> TextExtractionService:
    """Construct the dispatcher with all capabilities injected.

    Parameters
    ----------
    settings:
        Environment settings.  Read fresh when not provided.
    config:
        Resolved configuration dict (see :func:`load_config`).  Loaded
        from ``config/config.yaml`` when not provided.
    """
    s = settings or Settings()
    cfg = config if config is not None else load_config(settings=s)

    ocr_cfg = cfg.get("ocr", {})
    pdf_cfg = cfg.get("pdf", {})
    extraction_cfg = cfg.get("extraction", {})
    transcription_cfg = cfg.get("transcription", {})

    image_text = ImageTextService(
        providers=_build_ocr_providers(s, cfg),
        min_confidence=ocr_cfg.get("min_confidence", 0.6),
    )
    pdf_text = PyMuPDFTextProvider(
        ocr=image_text if pdf_cfg.get("ocr_fallback", True) else None,
        ocr_dpi=pdf_cfg.get("ocr_dpi", 200),
    )
    transcriber = TranscriptionService.from_settings(
        s, provider_name=transcription_cfg.get("provider")
    )
    video_audio = FFmpegAudioExtractor(ffmpeg_binary=s.ffmpeg_binary)

    service = TextExtractionService(
        image_text=image_text,
        pdf_text=pdf_text,
        transcriber=transcriber,
        video_audio=video_audio,
        max_concurrency=extraction_cfg.get("max_concurrency", s.extraction_max_concurrency),
        text_encoding=extraction_cfg.get("text_encoding", s.text_encoding),
    )
    _logger.debug(
        "text_extraction_service_built",
        ocr_providers=image_text.provider_names,
        transcription_provider=transcriber.provider.get_provider_name(),
        max_concurrency=extraction_cfg.get("max_concurrency", s.extraction_max_concurrency),
    )
    return service


async def extract_text_from_files(
    files: Sequence[FileRecord],
    service: TextExtractionService | None = None,
) -> str:
    """Extract and join the text of *files* with a default-wired service."""
    service = service or build_text_extraction_service()
    return await service.extract_text_from_files(files)

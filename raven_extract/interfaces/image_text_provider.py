"""Abstract base class for image text (OCR) providers.

Implementations wrap an OCR engine (Tesseract, EasyOCR) behind one
contract so :class:`~raven_extract.services.image_text_service.ImageTextService`
can try them in priority order without knowing which backend is in use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class OCRResult(BaseModel):
    """Immutable result of running OCR on one image."""

    model_config = ConfigDict(frozen=True)

    raw_text: str = Field(description="Recognised text with line breaks between blocks.")
    confidence: float = Field(ge=0.0, le=1.0, description="Mean word confidence, 0..1.")
    provider_used: str
    processing_time: float = Field(default=0.0, description="Seconds spent in the engine.")


# Concrete implementations: TesseractOCRProvider, EasyOCRProvider
# Located in: raven_extract/providers/ocr/
class IImageTextProvider(ABC):
    """Contract for OCR engines that read text from image files."""

    @abstractmethod
    async def extract_text(self, image_path: Path) -> OCRResult:
        """Run OCR on the image at *image_path*.

        Raises
        ------
        raven_extract.utils.errors.OCRExtractionError
            If the image cannot be decoded or no text is recognised.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"tesseract"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the engine is installed and usable."""

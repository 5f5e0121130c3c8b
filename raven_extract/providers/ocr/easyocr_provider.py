"""EasyOCR provider.

EasyOCR is deep-learning based and copes with handwriting and stylised
fonts better than Tesseract, at the cost of pulling in PyTorch.  It is an
optional extra (``pip install raven-extract[easyocr]``) and disabled unless
``EASYOCR_ENABLED=true``.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from raven_extract.interfaces.image_text_provider import IImageTextProvider, OCRResult
from raven_extract.utils.errors import OCRExtractionError
from raven_extract.utils.logging import get_logger


class EasyOCRProvider(IImageTextProvider):
    """OCR provider backed by EasyOCR.

    The reader loads ~100MB of weights, so it is created lazily on the
    first extraction and reused afterwards.
    """

    def __init__(self, languages: list[str] | None = None, gpu: bool = False) -> None:
        self._languages = languages or ["en"]
        self._gpu = gpu
        self._logger = get_logger(__name__)
        self.__reader = None

    async def extract_text(self, image_path: Path) -> OCRResult:
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(self._run_easyocr, Path(image_path))
        except Exception as exc:
            self._logger.error(
                "ocr_extraction_failed",
                provider="easyocr",
                path=str(image_path),
                error=str(exc),
            )
            raise OCRExtractionError(
                f"EasyOCR failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        elapsed = time.perf_counter() - start
        if result is None:
            raise OCRExtractionError(
                "No text recognised in image",
                provider_name=self.get_provider_name(),
            )

        raw_text, confidence = result
        self._logger.info(
            "ocr_extraction_complete",
            provider="easyocr",
            confidence=round(confidence, 4),
            processing_time=round(elapsed, 3),
        )
        return OCRResult(
            raw_text=raw_text,
            confidence=confidence,
            provider_used="easyocr",
            processing_time=elapsed,
        )

    def get_provider_name(self) -> str:
        return "easyocr"

    def is_available(self) -> bool:
        """Check that the easyocr package is importable."""
        try:
            import easyocr  # noqa: F401

            return True
        except ImportError:
            return False

    def _get_reader(self):  # noqa: ANN202
        """Lazily initialise the EasyOCR reader on first use."""
        if self.__reader is None:
            import easyocr

            self._logger.info("initializing_easyocr_reader", languages=self._languages)
            self.__reader = easyocr.Reader(self._languages, gpu=self._gpu)
        return self.__reader

    def _run_easyocr(self, image_path: Path) -> tuple[str, float] | None:
        with Image.open(image_path) as img:
            image = ImageOps.exif_transpose(img).convert("RGB")

        # paragraph=False keeps per-line confidences; lines are read top to bottom.
        results = self._get_reader().readtext(np.array(image))

        lines: list[str] = []
        confidences: list[float] = []
        for _bbox, text, confidence in results:
            text = text.strip()
            if not text:
                continue
            lines.append(text)
            confidences.append(float(confidence))

        if not lines:
            return None

        return "\n".join(lines), min(1.0, sum(confidences) / len(confidences))

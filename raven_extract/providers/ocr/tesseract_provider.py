"""Tesseract OCR provider.

Wraps pytesseract: the image is decoded with Pillow, Tesseract's word-level
``image_to_data`` output is collected, and the text is rebuilt with a line
break at every block or paragraph change.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

from PIL import Image, ImageOps

from raven_extract.interfaces.image_text_provider import IImageTextProvider, OCRResult
from raven_extract.utils.errors import OCRExtractionError
from raven_extract.utils.logging import get_logger

# pytesseract is optional at import time: without it is_available() is
# False and ImageTextService moves on to the next provider.
try:
    import pytesseract

    _PYTESSERACT_AVAILABLE = True
except ImportError:
    pytesseract = None  # type: ignore[assignment]
    _PYTESSERACT_AVAILABLE = False


class TesseractOCRProvider(IImageTextProvider):
    """OCR provider backed by Google Tesseract via pytesseract.

    Parameters
    ----------
    languages:
        Tesseract language codes joined with ``+`` (e.g. ``"eng+deu"``).
    """

    def __init__(self, languages: str = "eng") -> None:
        self._languages = languages
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # IImageTextProvider interface
    # ------------------------------------------------------------------

    async def extract_text(self, image_path: Path) -> OCRResult:
        """Extract text from the image at *image_path*.

        Tesseract is CPU-bound, so the call runs in a worker thread to keep
        other extractions in the batch moving.
        """
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(self._run_tesseract, Path(image_path))
        except OCRExtractionError:
            raise
        except Exception as exc:
            elapsed = time.perf_counter() - start
            self._logger.error(
                "ocr_extraction_failed",
                provider="tesseract",
                path=str(image_path),
                error=str(exc),
                processing_time=round(elapsed, 3),
            )
            raise OCRExtractionError(
                f"Tesseract OCR failed: {exc}",
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
            provider="tesseract",
            confidence=round(confidence, 4),
            processing_time=round(elapsed, 3),
        )
        return OCRResult(
            raw_text=raw_text,
            confidence=confidence,
            provider_used="tesseract",
            processing_time=elapsed,
        )

    def get_provider_name(self) -> str:
        return "tesseract"

    def is_available(self) -> bool:
        """Check that pytesseract is installed and the Tesseract binary exists."""
        if not _PYTESSERACT_AVAILABLE:
            return False
        try:
            pytesseract.get_tesseract_version()
            return True
        except Exception:
            return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run_tesseract(self, image_path: Path) -> tuple[str, float] | None:
        """Run Tesseract once and return ``(text, confidence)`` or ``None``.

        Only ``image_to_data`` is called; the text is rebuilt from its
        word-level rows instead of running ``image_to_string`` as well.
        """
        with Image.open(image_path) as img:
            # Honour EXIF orientation from phone cameras before OCR.
            image = ImageOps.exif_transpose(img).convert("RGB")

        data = pytesseract.image_to_data(
            image, lang=self._languages, output_type=pytesseract.Output.DICT
        )

        confidences: list[float] = []
        text_parts: list[str] = []
        prev_block = -1
        prev_par = -1

        for i in range(len(data["text"])):
            word = data["text"][i].strip()
            conf = float(data["conf"][i])

            # conf == -1 marks non-word rows (layout boxes).
            if not word or conf <= 0:
                continue

            block_num = data["block_num"][i]
            par_num = data["par_num"][i]
            if text_parts and (block_num != prev_block or par_num != prev_par):
                text_parts.append("\n")
            prev_block = block_num
            prev_par = par_num

            confidences.append(conf)
            text_parts.append(word)

        if not text_parts:
            return None

        raw_text = " ".join(text_parts).replace(" \n ", "\n").strip()
        avg_confidence = sum(confidences) / len(confidences) / 100.0
        return raw_text, min(1.0, avg_confidence)

"""PDF text provider backed by PyMuPDF (fitz).

Reads the text layer page by page and joins non-empty pages with a blank
line.  Scanned documents have no text layer; for those, when an OCR
capability is supplied, each page is rendered to a PNG and read by OCR.
"""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention

from raven_extract.interfaces.pdf_text_provider import IPDFTextProvider
from raven_extract.services.image_text_service import ImageTextService
from raven_extract.utils.errors import OCRExtractionError, PDFExtractionError
from raven_extract.utils.logging import get_logger

_PAGE_SEPARATOR = "\n\n"


class PyMuPDFTextProvider(IPDFTextProvider):
    """Extracts PDF text with PyMuPDF, with optional OCR for scanned pages.

    Parameters
    ----------
    ocr:
        Image text capability used when the document has no text layer.
        ``None`` disables the fallback.
    ocr_dpi:
        Resolution pages are rendered at before OCR.
    max_ocr_pages:
        Upper bound on pages rendered for OCR, since each one costs a full
        OCR pass.
    """

    def __init__(
        self,
        ocr: ImageTextService | None = None,
        ocr_dpi: int = 200,
        max_ocr_pages: int = 50,
    ) -> None:
        self._ocr = ocr
        self._ocr_dpi = ocr_dpi
        self._max_ocr_pages = max_ocr_pages
        self._logger = get_logger(__name__)

    async def extract_text(self, pdf_path: Path) -> str | None:
        path = Path(pdf_path)
        pages = await asyncio.to_thread(self._extract_pages, path)
        if pages:
            self._logger.info("pdf_text_extracted", path=str(path), pages=len(pages))
            return _PAGE_SEPARATOR.join(pages)

        if self._ocr is None:
            self._logger.warning("pdf_no_text_layer", path=str(path))
            return None

        return await self._ocr_pages(path, self._ocr)

    def get_provider_name(self) -> str:
        return "pymupdf"

    def is_available(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _open(self, path: Path) -> fitz.Document:
        try:
            doc = fitz.open(str(path))
        except Exception as exc:
            raise PDFExtractionError(
                f"Cannot open PDF {path.name}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if doc.needs_pass:
            doc.close()
            raise PDFExtractionError(
                f"PDF {path.name} is password protected",
                provider_name=self.get_provider_name(),
            )
        return doc

    def _extract_pages(self, path: Path) -> list[str]:
        """Return the stripped text of every page that has any."""
        doc = self._open(path)
        pages: list[str] = []
        try:
            for page in doc:
                text = page.get_text("text").strip()
                if text:
                    pages.append(text)
        finally:
            doc.close()
        return pages

    def _render_pages(self, path: Path, out_dir: Path) -> list[Path]:
        """Render up to ``max_ocr_pages`` pages of *path* to PNGs in *out_dir*."""
        doc = self._open(path)
        images: list[Path] = []
        try:
            for index, page in enumerate(doc):
                if index >= self._max_ocr_pages:
                    self._logger.warning(
                        "pdf_ocr_page_limit_reached",
                        path=str(path),
                        limit=self._max_ocr_pages,
                    )
                    break
                pixmap = page.get_pixmap(dpi=self._ocr_dpi)
                image_path = out_dir / f"page-{index + 1:04d}.png"
                pixmap.save(str(image_path))
                images.append(image_path)
        finally:
            doc.close()
        return images

    async def _ocr_pages(self, path: Path, ocr: ImageTextService) -> str | None:
        """OCR every rendered page; the page images never outlive this call."""
        texts: list[str] = []
        with tempfile.TemporaryDirectory(
            prefix="raven-extract-pdf-", ignore_cleanup_errors=True
        ) as tmp_dir:
            images = await asyncio.to_thread(self._render_pages, path, Path(tmp_dir))
            for image_path in images:
                try:
                    text = await ocr.extract_text(image_path)
                except OCRExtractionError as exc:
                    self._logger.debug(
                        "pdf_page_ocr_failed", page=image_path.name, error=str(exc)
                    )
                    continue
                if text:
                    texts.append(text)

        self._logger.info(
            "pdf_ocr_fallback_complete",
            path=str(path),
            pages_rendered=len(images),
            pages_with_text=len(texts),
        )
        return _PAGE_SEPARATOR.join(texts) or None

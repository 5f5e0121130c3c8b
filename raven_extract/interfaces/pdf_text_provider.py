"""Abstract base class for PDF text extraction providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


# Concrete implementation: PyMuPDFTextProvider (raven_extract/providers/pdf/)
class IPDFTextProvider(ABC):
    """Contract for backends that turn a PDF document into plain text."""

    @abstractmethod
    async def extract_text(self, pdf_path: Path) -> str | None:
        """Return the document text, or ``None`` when it has none.

        Raises
        ------
        raven_extract.utils.errors.PDFExtractionError
            If the document cannot be opened.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"pymupdf"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backend is installed and usable."""

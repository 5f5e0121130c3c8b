"""PDF text provider implementations."""

from raven_extract.providers.pdf.pymupdf_provider import PyMuPDFTextProvider

__all__ = ["PyMuPDFTextProvider"]

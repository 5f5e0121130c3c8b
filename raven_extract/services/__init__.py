"""Extraction services.

- TextExtractionService -- the dispatcher: classify, extract, join.
- ImageTextService -- OCR provider fallback chain with a confidence gate.
- TranscriptionService -- provider selection and WAV conversion for audio.
"""

from raven_extract.services.image_text_service import ImageTextService
from raven_extract.services.text_extraction_service import TextExtractionService
from raven_extract.services.transcription_service import TranscriptionService

__all__ = ["ImageTextService", "TextExtractionService", "TranscriptionService"]

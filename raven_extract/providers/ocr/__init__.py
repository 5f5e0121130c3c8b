"""OCR provider implementations.

Two implementations of IImageTextProvider, tried in the order given by
``ocr.provider_priority`` in config/config.yaml:
    1. TesseractOCRProvider -- lightweight, needs the tesseract binary.
    2. EasyOCRProvider -- deep-learning OCR (PyTorch), optional extra.
"""

from raven_extract.providers.ocr.easyocr_provider import EasyOCRProvider
from raven_extract.providers.ocr.tesseract_provider import TesseractOCRProvider

__all__ = ["EasyOCRProvider", "TesseractOCRProvider"]

"""Concrete capability adapters.

Each subpackage implements one interface from ``raven_extract.interfaces``:

- ``ocr`` -- IImageTextProvider (Tesseract, EasyOCR)
- ``pdf`` -- IPDFTextProvider (PyMuPDF)
- ``transcription`` -- ITranscriptionProvider (faster-whisper, Whisper API)
- ``video`` -- IVideoAudioProvider (ffmpeg)
"""

"""Custom exception hierarchy for raven-extract.

All package exceptions inherit from :class:`RavenExtractError`, which
carries an optional ``provider_name`` so log lines can identify which
capability backend (e.g. "tesseract", "pymupdf", "ffmpeg") failed.

    RavenExtractError  (base -- catch-all for any raven-extract error)
    +-- OCRExtractionError       (image-to-text)
    +-- PDFExtractionError       (PDF text layer / page rendering)
    +-- TranscriptionError       (speech-to-text)
    +-- AudioExtractionError     (video-to-audio demuxing)
    +-- ProviderUnavailableError (engine binary or package missing)
    +-- ConfigurationError       (startup / missing config)

The extraction dispatcher turns any of these into a per-file ``FAILED``
outcome, so a single broken file never aborts a batch.
"""


class RavenExtractError(Exception):
    """Base exception for all raven-extract errors.

    The ``__str__`` method prefixes the provider name in brackets, e.g.
    ``[tesseract] No text found``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Capability errors
# ---------------------------------------------------------------------------

class OCRExtractionError(RavenExtractError):
    """Raised when image text extraction fails (Tesseract, EasyOCR)."""

    def __init__(
        self,
        message: str = "OCR text extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PDFExtractionError(RavenExtractError):
    """Raised when a PDF cannot be opened or its pages cannot be read."""

    def __init__(
        self,
        message: str = "PDF text extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TranscriptionError(RavenExtractError):
    """Raised when a speech-to-text backend fails on an audio file."""

    def __init__(
        self,
        message: str = "Audio transcription failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AudioExtractionError(RavenExtractError):
    """Raised when the audio track of a video cannot be extracted."""

    def __init__(
        self,
        message: str = "Audio extraction from video failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Environment / configuration errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(RavenExtractError):
    """Raised when a backend binary or package is not installed."""

    def __init__(
        self,
        message: str = "Extraction backend is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(RavenExtractError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

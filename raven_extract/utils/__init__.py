"""Utility modules for raven-extract.

- **errors** -- exception hierarchy rooted at RavenExtractError; each
  capability raises its own subclass.
- **logging** -- structlog setup with console output in development and
  JSON in production.
- **concurrency** -- semaphore-bounded ``gather`` that keeps results in
  input order.
- **temp_files** -- scoped temporary paths for intermediate audio and page
  images, removed on every exit path.
"""

from raven_extract.utils.concurrency import make_semaphore, throttled_gather
from raven_extract.utils.errors import (
    AudioExtractionError,
    ConfigurationError,
    OCRExtractionError,
    PDFExtractionError,
    ProviderUnavailableError,
    RavenExtractError,
    TranscriptionError,
)
from raven_extract.utils.logging import configure_logging, get_logger
from raven_extract.utils.temp_files import new_temp_path, remove_quietly, removing

__all__ = [
    "AudioExtractionError",
    "ConfigurationError",
    "OCRExtractionError",
    "PDFExtractionError",
    "ProviderUnavailableError",
    "RavenExtractError",
    "TranscriptionError",
    "configure_logging",
    "get_logger",
    "make_semaphore",
    "new_temp_path",
    "remove_quietly",
    "removing",
    "throttled_gather",
]

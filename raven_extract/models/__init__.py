"""Pydantic models for file descriptors and extraction results.

All models are frozen.  Both kinds are transient: built when a batch
starts and discarded once the caller has the text.
"""

from raven_extract.models.extraction import (
    SECTION_SEPARATOR,
    ExtractionReport,
    ExtractionSection,
    ExtractionStatus,
    FileExtractionOutcome,
)
from raven_extract.models.file_record import FileKind, FileRecord, classify_file_type

__all__ = [
    "SECTION_SEPARATOR",
    "ExtractionReport",
    "ExtractionSection",
    "ExtractionStatus",
    "FileExtractionOutcome",
    "FileKind",
    "FileRecord",
    "classify_file_type",
]

"""Extraction result models.

Each input file produces exactly one :class:`FileExtractionOutcome`.  The
outcomes of a batch are collected, in input order, into an
:class:`ExtractionReport`, whose ``text`` is the joined document the
dispatcher returns to callers that only want a string.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from raven_extract.models.file_record import FileKind, FileRecord

SECTION_SEPARATOR = "\n\n"


class ExtractionStatus(str, Enum):
    """What happened to one file."""

    EXTRACTED = "extracted"
    EMPTY = "empty"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


class ExtractionSection(BaseModel):
    """A labelled block of extracted text attributed to one file."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    label: str | None = None
    text: str

    @property
    def header(self) -> str:
        if self.label:
            return f"=== {self.file_name} ({self.label}) ==="
        return f"=== {self.file_name} ==="

    def render(self) -> str:
        return f"{self.header}\n{self.text}"


class FileExtractionOutcome(BaseModel):
    """Per-file result: a section on success, a reason otherwise."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(description="Position of the file in the input batch.")
    file: FileRecord
    kind: FileKind
    status: ExtractionStatus
    section: ExtractionSection | None = None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.section is not None


class ExtractionReport(BaseModel):
    """Ordered outcomes of one batch."""

    model_config = ConfigDict(frozen=True)

    outcomes: list[FileExtractionOutcome] = Field(default_factory=list)

    @property
    def sections(self) -> list[ExtractionSection]:
        return [o.section for o in self.outcomes if o.section is not None]

    @property
    def skipped(self) -> list[FileExtractionOutcome]:
        return [o for o in self.outcomes if o.section is None]

    @property
    def text(self) -> str:
        """Rendered sections joined by a blank line; ``""`` when none."""
        return SECTION_SEPARATOR.join(s.render() for s in self.sections)

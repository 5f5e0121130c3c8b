"""File descriptor model and file-type classification.

A :class:`FileRecord` is what callers hand to the extraction dispatcher:
a display name, a short type tag ("pdf", "JPG", "m4a") and a path.  The
tag is mapped onto a closed :class:`FileKind` by the pure function
:func:`classify_file_type`, which decides which capability handles it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FileKind(str, Enum):
    """Extraction bucket a file type tag belongs to."""

    IMAGE = "image"
    PDF = "pdf"
    PLAIN_TEXT = "plain_text"
    AUDIO = "audio"
    VIDEO = "video"
    UNSUPPORTED = "unsupported"

    @property
    def section_label(self) -> str | None:
        """Suffix shown in a section header, e.g. ``(Audio Transcript)``."""
        return _SECTION_LABELS.get(self)


_SECTION_LABELS: dict[FileKind, str] = {
    FileKind.AUDIO: "Audio Transcript",
    FileKind.VIDEO: "Video Transcript",
}

IMAGE_TYPES: frozenset[str] = frozenset({"jpg", "jpeg", "png", "tiff", "heic"})
PDF_TYPES: frozenset[str] = frozenset({"pdf"})
PLAIN_TEXT_TYPES: frozenset[str] = frozenset({"md", "markdown", "txt", "text"})
AUDIO_TYPES: frozenset[str] = frozenset({"mp3", "wav", "aiff", "m4a"})
VIDEO_TYPES: frozenset[str] = frozenset({"mp4", "mov", "avi", "mkv", "m4v"})

_KIND_BY_TYPE: dict[str, FileKind] = {
    **{t: FileKind.IMAGE for t in IMAGE_TYPES},
    **{t: FileKind.PDF for t in PDF_TYPES},
    **{t: FileKind.PLAIN_TEXT for t in PLAIN_TEXT_TYPES},
    **{t: FileKind.AUDIO for t in AUDIO_TYPES},
    **{t: FileKind.VIDEO for t in VIDEO_TYPES},
}


def classify_file_type(file_type: str) -> FileKind:
    """Map a raw type tag onto its extraction bucket.

    Matching is exact after lower-casing: ``"PNG"`` is an image, while
    ``".png"`` and ``" png"`` are unsupported.
    """
    return _KIND_BY_TYPE.get(file_type.lower(), FileKind.UNSUPPORTED)


class FileRecord(BaseModel):
    """An immutable description of one file to extract text from."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name used in the section header.")
    file_type: str = Field(description="Short type tag such as 'pdf' or 'jpg'.")
    path: Path = Field(description="Filesystem location of the file.")

    @property
    def kind(self) -> FileKind:
        return classify_file_type(self.file_type)

    @classmethod
    def from_path(cls, path: Path | str) -> FileRecord:
        """Build a record from a path, taking the tag from its suffix."""
        p = Path(path)
        return cls(name=p.name, file_type=p.suffix.lstrip("."), path=p)

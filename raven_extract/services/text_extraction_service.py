"""Extraction dispatcher: many files in, one text document out.

Every file in a batch is classified by its type tag and routed to one
capability:

    IMAGE       →  image text (OCR)
    PDF         →  PDF text layer
    PLAIN_TEXT  →  read from disk with the configured encoding
    AUDIO       →  transcription
    VIDEO       →  video audio extraction, then transcription
    UNSUPPORTED →  nothing

The result of each file becomes one :class:`FileExtractionOutcome`.  A file
that yields no text, is unsupported, or whose capability raises is simply
left out of the joined document; nothing a single file does can abort the
batch.

Architecture: indexed slots
---------------------------
Outcomes are written to a slot array sized to the input, one slot per
index, and read back in index order.  That keeps section order equal to
input order whether files run one at a time (``max_concurrency=1``, the
default) or concurrently under a semaphore.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

from raven_extract.interfaces.pdf_text_provider import IPDFTextProvider
from raven_extract.interfaces.video_audio_provider import IVideoAudioProvider
from raven_extract.models.extraction import (
    ExtractionReport,
    ExtractionSection,
    ExtractionStatus,
    FileExtractionOutcome,
)
from raven_extract.models.file_record import FileKind, FileRecord, classify_file_type
from raven_extract.services.image_text_service import ImageTextService
from raven_extract.services.transcription_service import TranscriptionService
from raven_extract.utils.concurrency import make_semaphore, throttled_gather
from raven_extract.utils.logging import get_logger
from raven_extract.utils.temp_files import removing


class _NoAudioTrack(Exception):
    """Internal marker: the video produced no audio to transcribe."""


class TextExtractionService:
    """Turns an ordered batch of files into one sectioned text document.

    Parameters
    ----------
    image_text:
        OCR capability for image files (and nothing else).
    pdf_text:
        PDF text capability.
    transcriber:
        Speech-to-text capability, shared by audio files and videos.
    video_audio:
        Produces a temporary audio file from a video.
    max_concurrency:
        How many files may be extracted at the same time.
    text_encoding:
        Encoding used to read plain-text files.
    """

    def __init__(
        self,
        image_text: ImageTextService,
        pdf_text: IPDFTextProvider,
        transcriber: TranscriptionService,
        video_audio: IVideoAudioProvider,
        max_concurrency: int = 1,
        text_encoding: str = "utf-8",
    ) -> None:
        self._image_text = image_text
        self._pdf_text = pdf_text
        self._transcriber = transcriber
        self._video_audio = video_audio
        self._max_concurrency = max(1, max_concurrency)
        self._text_encoding = text_encoding
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def extract_text_from_files(self, files: Sequence[FileRecord]) -> str:
        """Return every file's text as one document.

        Sections look like ``=== name ===`` (or ``=== name (Audio
        Transcript) ===`` / ``(Video Transcript)``) followed by the text,
        and are separated by a blank line.  Returns ``""`` when no file
        produced text.
        """
        report = await self.extract_report(files)
        return report.text

    async def extract_report(self, files: Sequence[FileRecord]) -> ExtractionReport:
        """Extract every file and return the per-file outcomes in input order."""
        if not files:
            return ExtractionReport()

        slots: list[FileExtractionOutcome | None] = [None] * len(files)

        async def _fill(index: int, file: FileRecord) -> None:
            slots[index] = await self.extract_file(index, file)

        if self._max_concurrency == 1:
            for index, file in enumerate(files):
                await _fill(index, file)
        else:
            semaphore = make_semaphore(self._max_concurrency)
            await throttled_gather(
                [_fill(index, file) for index, file in enumerate(files)],
                semaphore,
            )

        report = ExtractionReport(outcomes=[o for o in slots if o is not None])
        self._logger.info(
            "extraction_batch_complete",
            files=len(files),
            sections=len(report.sections),
            skipped=len(report.skipped),
        )
        return report

    async def extract_file(self, index: int, file: FileRecord) -> FileExtractionOutcome:
        """Extract one file.  Never raises except on cancellation."""
        kind = classify_file_type(file.file_type)

        if kind is FileKind.UNSUPPORTED:
            self._logger.debug(
                "file_type_unsupported", file=file.name, file_type=file.file_type
            )
            return FileExtractionOutcome(
                index=index,
                file=file,
                kind=kind,
                status=ExtractionStatus.UNSUPPORTED,
                reason=f"unsupported file type: {file.file_type!r}",
            )

        try:
            text = await self._dispatch(kind, file)
        except _NoAudioTrack:
            return FileExtractionOutcome(
                index=index,
                file=file,
                kind=kind,
                status=ExtractionStatus.EMPTY,
                reason="no audio track extracted",
            )
        except Exception as exc:
            self._logger.warning(
                "file_extraction_failed",
                file=file.name,
                kind=kind.value,
                error=str(exc),
            )
            return FileExtractionOutcome(
                index=index,
                file=file,
                kind=kind,
                status=ExtractionStatus.FAILED,
                reason=str(exc) or type(exc).__name__,
            )

        if not text:
            self._logger.info("file_extraction_empty", file=file.name, kind=kind.value)
            return FileExtractionOutcome(
                index=index,
                file=file,
                kind=kind,
                status=ExtractionStatus.EMPTY,
                reason="no text extracted",
            )

        self._logger.info(
            "file_extracted", file=file.name, kind=kind.value, characters=len(text)
        )
        return FileExtractionOutcome(
            index=index,
            file=file,
            kind=kind,
            status=ExtractionStatus.EXTRACTED,
            section=ExtractionSection(
                file_name=file.name,
                label=kind.section_label,
                text=text,
            ),
        )

    # ------------------------------------------------------------------
    # Per-kind extraction
    # ------------------------------------------------------------------

    async def _dispatch(self, kind: FileKind, file: FileRecord) -> str | None:
        path = Path(file.path)
        if kind is FileKind.IMAGE:
            return await self._image_text.extract_text(path)
        if kind is FileKind.PDF:
            return await self._pdf_text.extract_text(path)
        if kind is FileKind.PLAIN_TEXT:
            return await self._read_text(path)
        if kind is FileKind.AUDIO:
            return await self._transcriber.transcribe(path, file_type=file.file_type)
        if kind is FileKind.VIDEO:
            return await self._transcribe_video(path)
        raise ValueError(f"No extractor for {kind}")

    async def _read_text(self, path: Path) -> str:
        """Read a plain-text file as-is; decode errors surface as a failed file.

        Bytes are decoded directly so line endings are kept exactly as stored.
        """
        raw = await asyncio.to_thread(path.read_bytes)
        return raw.decode(self._text_encoding)

    async def _transcribe_video(self, path: Path) -> str | None:
        audio_path = await self._video_audio.extract_audio(path)
        if audio_path is None:
            raise _NoAudioTrack()

        # The intermediate audio belongs to this video alone and is removed
        # after the transcription attempt, whatever its outcome.
        async with removing(audio_path):
            return await self._transcriber.transcribe(audio_path, file_type="wav")

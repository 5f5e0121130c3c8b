"""Unit tests for TextExtractionService -- dispatch, ordering, skips, cleanup."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from raven_extract.interfaces.transcription_provider import (
    ITranscriptionProvider,
    TranscriptionResult,
)
from raven_extract.models.extraction import ExtractionStatus
from raven_extract.models.file_record import FileKind, FileRecord
from raven_extract.services.text_extraction_service import TextExtractionService
from raven_extract.services.transcription_service import TranscriptionService
from raven_extract.utils.errors import OCRExtractionError, TranscriptionError


# ======================================================================
# Joined document
# ======================================================================


class TestExtractTextFromFiles:
    @pytest.mark.asyncio
    async def test_mixed_batch_produces_ordered_sections(
        self, service, make_record, image_text, transcriber, video_audio, temp_audio
    ) -> None:
        files = [
            make_record("notes.txt", content="plain body"),
            make_record("scan.png"),
            make_record("clip.mp4"),
        ]
        image_text.extract_text.return_value = "Hello"
        video_audio.extract_audio.return_value = temp_audio
        transcriber.transcribe.return_value = "World"

        text = await service.extract_text_from_files(files)

        assert text == (
            "=== notes.txt ===\nplain body\n\n"
            "=== scan.png ===\nHello\n\n"
            "=== clip.mp4 (Video Transcript) ===\nWorld"
        )
        transcriber.transcribe.assert_awaited_once_with(temp_audio, file_type="wav")
        assert not temp_audio.exists()

    @pytest.mark.asyncio
    async def test_empty_input_yields_empty_string(self, service) -> None:
        assert await service.extract_text_from_files([]) == ""

    @pytest.mark.asyncio
    async def test_nothing_extracted_yields_empty_string(self, service, make_record) -> None:
        files = [make_record("scan.jpg"), make_record("doc.pdf")]
        assert await service.extract_text_from_files(files) == ""

    @pytest.mark.asyncio
    async def test_unsupported_file_is_ignored(
        self, service, make_record, image_text, pdf_text, transcriber, video_audio
    ) -> None:
        files = [
            make_record("a.pdf"),
            make_record("report.docx"),
            make_record("b.jpeg"),
        ]
        pdf_text.extract_text.return_value = "pdf body"
        image_text.extract_text.return_value = "image body"

        text = await service.extract_text_from_files(files)

        assert text.count("=== ") == 2
        assert "report.docx" not in text
        assert text == "=== a.pdf ===\npdf body\n\n=== b.jpeg ===\nimage body"
        # The unsupported file never reached any capability.
        called_paths = [c.args[0] for c in image_text.extract_text.await_args_list]
        called_paths += [c.args[0] for c in pdf_text.extract_text.await_args_list]
        assert all(p.name != "report.docx" for p in called_paths)
        transcriber.transcribe.assert_not_awaited()
        video_audio.extract_audio.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_audio_section_is_labelled(self, service, make_record, transcriber) -> None:
        transcriber.transcribe.return_value = "spoken words"

        text = await service.extract_text_from_files([make_record("memo.m4a")])

        assert text == "=== memo.m4a (Audio Transcript) ===\nspoken words"

    @pytest.mark.asyncio
    async def test_type_tag_is_case_insensitive(self, service, make_record, pdf_text) -> None:
        pdf_text.extract_text.return_value = "upper"

        text = await service.extract_text_from_files([make_record("SCAN.PDF", file_type="PDF")])

        assert text == "=== SCAN.PDF ===\nupper"

    @pytest.mark.asyncio
    async def test_markdown_is_read_as_text(self, service, make_record) -> None:
        record = make_record("readme", file_type="markdown", content="# Title\n\nbody")

        text = await service.extract_text_from_files([record])

        assert text == "=== readme ===\n# Title\n\nbody"

    @pytest.mark.asyncio
    async def test_text_line_endings_are_preserved(self, service, make_record) -> None:
        record = make_record("win.txt", content=b"line1\r\nline2\rold-mac")

        text = await service.extract_text_from_files([record])

        assert text == "=== win.txt ===\nline1\r\nline2\rold-mac"

    @pytest.mark.asyncio
    async def test_audio_type_tag_reaches_transcriber(
        self, service, make_record, transcriber
    ) -> None:
        transcriber.transcribe.return_value = "hi"
        record = make_record("memo.mp3", file_type="MP3")

        await service.extract_text_from_files([record])

        transcriber.transcribe.assert_awaited_once_with(record.path, file_type="MP3")

    @pytest.mark.asyncio
    async def test_audio_tag_wins_over_missing_path_suffix(
        self, image_text, pdf_text, video_audio, tmp_path
    ) -> None:
        stored = tmp_path / "3f9a2c"
        stored.write_bytes(b"ID3")
        provider = MagicMock(spec=ITranscriptionProvider)
        provider.get_provider_name.return_value = "fake-whisper"
        provider.supported_formats.return_value = [".mp3", ".wav"]
        provider.transcribe = AsyncMock(return_value=TranscriptionResult(text="hi"))
        service = TextExtractionService(
            image_text=image_text,
            pdf_text=pdf_text,
            transcriber=TranscriptionService(provider),
            video_audio=video_audio,
        )

        with patch(
            "raven_extract.services.transcription_service.shutil.which",
            return_value=None,
        ):
            text = await service.extract_text_from_files(
                [FileRecord(name="memo.mp3", file_type="mp3", path=stored)]
            )

        assert text == "=== memo.mp3 (Audio Transcript) ===\nhi"
        provider.transcribe.assert_awaited_once_with(str(stored), language=None)


# ======================================================================
# Failures never abort the batch
# ======================================================================


class TestFailureIsolation:
    @pytest.mark.asyncio
    async def test_undecodable_text_file_is_skipped(self, service, make_record) -> None:
        files = [
            make_record("bad.txt", content=b"\xff\xfe\xfa broken"),
            make_record("good.txt", content="fine"),
        ]

        report = await service.extract_report(files)

        assert report.text == "=== good.txt ===\nfine"
        assert report.outcomes[0].status is ExtractionStatus.FAILED
        assert report.outcomes[1].status is ExtractionStatus.EXTRACTED

    @pytest.mark.asyncio
    async def test_missing_text_file_is_skipped(self, service, make_record) -> None:
        report = await service.extract_report([make_record("gone.txt")])

        assert report.text == ""
        assert report.outcomes[0].status is ExtractionStatus.FAILED

    @pytest.mark.asyncio
    async def test_capability_error_does_not_stop_later_files(
        self, service, make_record, image_text, pdf_text
    ) -> None:
        image_text.extract_text.side_effect = OCRExtractionError("All OCR providers failed")
        pdf_text.extract_text.return_value = "still here"

        report = await service.extract_report([make_record("a.png"), make_record("b.pdf")])

        assert report.text == "=== b.pdf ===\nstill here"
        failed = report.outcomes[0]
        assert failed.status is ExtractionStatus.FAILED
        assert "All OCR providers failed" in failed.reason

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, service, make_record, pdf_text) -> None:
        pdf_text.extract_text.side_effect = RuntimeError("segfault-ish")

        report = await service.extract_report([make_record("x.pdf")])

        assert report.outcomes[0].status is ExtractionStatus.FAILED
        assert report.outcomes[0].reason == "segfault-ish"

    @pytest.mark.asyncio
    async def test_empty_capability_result_adds_no_section(
        self, service, make_record, image_text
    ) -> None:
        image_text.extract_text.return_value = ""

        report = await service.extract_report([make_record("blank.png")])

        assert report.sections == []
        assert report.outcomes[0].status is ExtractionStatus.EMPTY


# ======================================================================
# Video intermediate audio lifecycle
# ======================================================================


class TestVideoCleanup:
    @pytest.mark.asyncio
    async def test_temp_audio_removed_when_transcription_fails(
        self, service, make_record, transcriber, video_audio, temp_audio
    ) -> None:
        video_audio.extract_audio.return_value = temp_audio
        transcriber.transcribe.side_effect = TranscriptionError("model crashed")

        report = await service.extract_report([make_record("clip.mov")])

        assert report.sections == []
        assert report.outcomes[0].status is ExtractionStatus.FAILED
        assert not temp_audio.exists()

    @pytest.mark.asyncio
    async def test_temp_audio_removed_when_transcript_empty(
        self, service, make_record, transcriber, video_audio, temp_audio
    ) -> None:
        video_audio.extract_audio.return_value = temp_audio
        transcriber.transcribe.return_value = None

        report = await service.extract_report([make_record("clip.mkv")])

        assert report.outcomes[0].status is ExtractionStatus.EMPTY
        assert not temp_audio.exists()

    @pytest.mark.asyncio
    async def test_no_audio_track_skips_transcription(
        self, service, make_record, transcriber, video_audio
    ) -> None:
        video_audio.extract_audio.return_value = None

        report = await service.extract_report([make_record("silent.avi")])

        transcriber.transcribe.assert_not_awaited()
        outcome = report.outcomes[0]
        assert outcome.kind is FileKind.VIDEO
        assert outcome.status is ExtractionStatus.EMPTY
        assert outcome.reason == "no audio track extracted"

    @pytest.mark.asyncio
    async def test_already_deleted_temp_audio_is_not_an_error(
        self, service, make_record, transcriber, video_audio, temp_audio
    ) -> None:
        video_audio.extract_audio.return_value = temp_audio

        async def _transcribe_and_delete(path: Path, file_type: str | None = None) -> str:
            path.unlink()
            return "ok"

        transcriber.transcribe.side_effect = _transcribe_and_delete

        text = await service.extract_text_from_files([make_record("clip.m4v")])

        assert text == "=== clip.m4v (Video Transcript) ===\nok"

    @pytest.mark.asyncio
    async def test_cancellation_still_removes_temp_audio(
        self, service, make_record, transcriber, video_audio, temp_audio
    ) -> None:
        video_audio.extract_audio.return_value = temp_audio
        started = asyncio.Event()

        async def _hang(path: Path, file_type: str | None = None) -> str:
            started.set()
            await asyncio.Event().wait()
            return "never"

        transcriber.transcribe.side_effect = _hang

        task = asyncio.create_task(service.extract_text_from_files([make_record("clip.mp4")]))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert not temp_audio.exists()


# ======================================================================
# Concurrent extraction
# ======================================================================


class TestConcurrentExtraction:
    def _service(self, image_text, pdf_text, transcriber, video_audio, n: int) -> TextExtractionService:
        return TextExtractionService(
            image_text=image_text,
            pdf_text=pdf_text,
            transcriber=transcriber,
            video_audio=video_audio,
            max_concurrency=n,
        )

    @pytest.mark.asyncio
    async def test_order_preserved_when_later_files_finish_first(
        self, image_text, pdf_text, transcriber, video_audio, make_record
    ) -> None:
        delays = {"a.png": 0.05, "b.png": 0.02, "c.png": 0.0}

        async def _ocr(path: Path) -> str:
            await asyncio.sleep(delays[path.name])
            return path.stem.upper()

        image_text.extract_text = AsyncMock(side_effect=_ocr)
        service = self._service(image_text, pdf_text, transcriber, video_audio, 3)

        files = [make_record(name) for name in delays]
        text = await service.extract_text_from_files(files)

        assert text == "=== a.png ===\nA\n\n=== b.png ===\nB\n\n=== c.png ===\nC"

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(
        self, image_text, pdf_text, transcriber, video_audio, make_record
    ) -> None:
        running = 0
        peak = 0

        async def _ocr(path: Path) -> str:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return "t"

        image_text.extract_text = AsyncMock(side_effect=_ocr)
        service = self._service(image_text, pdf_text, transcriber, video_audio, 2)

        report = await service.extract_report([make_record(f"{i}.png") for i in range(6)])

        assert peak == 2
        assert [o.index for o in report.outcomes] == list(range(6))

    @pytest.mark.asyncio
    async def test_each_video_cleans_its_own_audio(
        self, image_text, pdf_text, transcriber, video_audio, make_record, tmp_path
    ) -> None:
        temp_files: dict[str, Path] = {}

        async def _extract(path: Path) -> Path:
            audio = tmp_path / f"{path.stem}.wav"
            audio.write_bytes(b"data")
            temp_files[path.name] = audio
            return audio

        async def _transcribe(path: Path, file_type: str | None = None) -> str:
            assert path.exists()
            if path.stem == "two":
                raise TranscriptionError("bad audio")
            await asyncio.sleep(0.01)
            return f"said {path.stem}"

        video_audio.extract_audio = AsyncMock(side_effect=_extract)
        transcriber.transcribe = AsyncMock(side_effect=_transcribe)
        service = self._service(image_text, pdf_text, transcriber, video_audio, 3)

        text = await service.extract_text_from_files(
            [make_record("one.mp4"), make_record("two.mp4"), make_record("three.mp4")]
        )

        assert text == (
            "=== one.mp4 (Video Transcript) ===\nsaid one\n\n"
            "=== three.mp4 (Video Transcript) ===\nsaid three"
        )
        assert len(temp_files) == 3
        assert not any(p.exists() for p in temp_files.values())


# ======================================================================
# Report
# ======================================================================


class TestExtractReport:
    @pytest.mark.asyncio
    async def test_one_outcome_per_input_in_order(
        self, service, make_record, image_text
    ) -> None:
        image_text.extract_text.return_value = "img"
        files = [
            make_record("a.txt", content="alpha"),
            make_record("b.xyz"),
            make_record("c.png"),
        ]

        report = await service.extract_report(files)

        assert [o.file.name for o in report.outcomes] == ["a.txt", "b.xyz", "c.png"]
        assert [o.status for o in report.outcomes] == [
            ExtractionStatus.EXTRACTED,
            ExtractionStatus.UNSUPPORTED,
            ExtractionStatus.EXTRACTED,
        ]
        assert report.outcomes[1].reason == "unsupported file type: 'xyz'"
        assert [o.file.name for o in report.skipped] == ["b.xyz"]

# =============================================================================
# raven_extract/cli/extract.py -- CLI Extract Command
# =============================================================================
#
# Runs the extraction dispatcher over files given on the command line and
# prints the joined document, exactly what the application hands to the
# chat/notes layer.
#
# Typical usage:
#   python -m raven_extract.cli notes.txt scan.png clip.mp4
#   python -m raven_extract.cli *.pdf --json            # per-file outcomes
#   python -m raven_extract.cli a.m4a -o transcript.txt  # write to file
#
# The file type of each argument is its suffix, so "scan.PNG" is an image
# and "README" (no suffix) is skipped as unsupported.
#
# The --quiet flag (auto-enabled with --json) sends all log output to
# stderr at WARNING+ so stdout carries only the result.
# =============================================================================

"""Standalone CLI for extracting text from a batch of files.

Usage::

    python -m raven_extract.cli notes.txt scan.png clip.mp4
    python -m raven_extract.cli report.pdf --json
    python -m raven_extract.cli memo.m4a --output memo.txt
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time
from pathlib import Path

from raven_extract.models.extraction import ExtractionReport
from raven_extract.models.file_record import FileRecord


def _format_json_output(report: ExtractionReport) -> str:
    """Serialize the report: the joined text plus one entry per file."""
    output = {
        "text": report.text,
        "outcomes": [
            {
                "index": o.index,
                "name": o.file.name,
                "file_type": o.file.file_type,
                "kind": o.kind.value,
                "status": o.status.value,
                "reason": o.reason,
            }
            for o in report.outcomes
        ],
    }
    return json.dumps(output, indent=2, ensure_ascii=False)


async def _run(
    paths: list[Path],
    json_output: bool,
    output_file: str | None,
    concurrency: int | None,
    quiet: bool = False,
) -> int:
    """Validate inputs, run the dispatcher and emit the result.

    Returns 0 on success, 1 on validation error.
    """
    missing = [p for p in paths if not p.is_file()]
    if missing:
        for p in missing:
            print(f"Error: File not found: {p}", file=sys.stderr)
        return 1

    # Deferred import: building the service loads settings and providers,
    # which is wasted work when the arguments are invalid.
    from raven_extract.config.loader import load_config
    from raven_extract.config.settings import Settings
    from raven_extract.main import build_text_extraction_service

    settings = Settings()
    if not quiet:
        from raven_extract.utils.logging import configure_logging

        configure_logging(log_level=settings.log_level)

    config = load_config(settings=settings)
    if concurrency is not None:
        config.setdefault("extraction", {})["max_concurrency"] = concurrency

    service = build_text_extraction_service(settings=settings, config=config)
    files = [FileRecord.from_path(p) for p in paths]

    print(f"Extracting {len(files)} file(s)", file=sys.stderr)
    start = time.monotonic()
    report = await service.extract_report(files)
    elapsed = time.monotonic() - start
    print(
        f"Done in {elapsed:.1f}s: {len(report.sections)} extracted, "
        f"{len(report.skipped)} skipped",
        file=sys.stderr,
    )

    text = _format_json_output(report) if json_output else report.text

    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        print(f"Results written to: {output_file}", file=sys.stderr)
    else:
        print(text)

    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m raven_extract.cli",
        description=(
            "Extract text from images, PDFs, text files, audio and video, "
            "and print it as one sectioned document."
        ),
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=str,
        help="Files to extract, in output order.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the text and per-file outcomes as JSON.",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write results to a file instead of stdout.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output below WARNING.",
    )
    parser.add_argument(
        "--concurrency", "-c",
        type=int,
        default=None,
        help="Number of files extracted at once (default from config).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Exits 0 on success, 1 on invalid input."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    quiet = args.quiet or args.json_output
    if quiet:
        from raven_extract.utils.logging import configure_quiet_logging

        configure_quiet_logging()

    paths = [Path(f).resolve() for f in args.files]
    exit_code = asyncio.run(_run(paths, args.json_output, args.output, args.concurrency, quiet=quiet))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

"""Video-to-audio extraction via the ffmpeg CLI.

# ─── DESIGN ────────────────────────────────────────────────────────────
#
# The audio track is written as 16 kHz mono PCM WAV, the format Whisper
# resamples to internally, so no provider ever needs a second conversion.
#
#   ffmpeg -y -i VIDEO -vn -ac 1 -ar 16000 -acodec pcm_s16le OUT.wav
#
# The subprocess is awaited with asyncio so a long demux never blocks the
# event loop.  Binary detection happens at call time, not at init, so a
# machine without ffmpeg still extracts every non-video file.
#
# The output file is a fresh mkstemp path per call.  It is handed to the
# caller only on success; on failure or cancellation it is removed here.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from raven_extract.interfaces.video_audio_provider import IVideoAudioProvider
from raven_extract.utils.errors import AudioExtractionError, ProviderUnavailableError
from raven_extract.utils.logging import get_logger
from raven_extract.utils.temp_files import new_temp_path, remove_quietly

logger = get_logger(__name__)

_STDERR_TAIL = 500


class FFmpegAudioExtractor(IVideoAudioProvider):
    """Extracts the audio track of a video into a temporary WAV file.

    Parameters
    ----------
    ffmpeg_binary:
        Name or path of the ffmpeg executable.
    sample_rate:
        Output sample rate in Hz.
    """

    def __init__(self, ffmpeg_binary: str = "ffmpeg", sample_rate: int = 16000) -> None:
        self._ffmpeg_binary = ffmpeg_binary
        self._sample_rate = sample_rate

    async def extract_audio(self, video_path: Path) -> Path | None:
        ffmpeg = shutil.which(self._ffmpeg_binary)
        if not ffmpeg:
            raise ProviderUnavailableError(
                "ffmpeg not installed. Install via: brew install ffmpeg "
                "(macOS) or apt install ffmpeg (Linux)",
                provider_name=self.get_provider_name(),
            )

        video = Path(video_path)
        output_path = new_temp_path(".wav")
        proc = None
        try:
            proc = await asyncio.create_subprocess_exec(
                ffmpeg, "-nostdin", "-y", "-i", str(video),
                "-vn", "-ac", "1", "-ar", str(self._sample_rate),
                "-acodec", "pcm_s16le", str(output_path),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate()
        except BaseException as exc:
            # Cancellation or spawn failure: no orphaned ffmpeg, no orphaned WAV.
            try:
                if proc is not None and proc.returncode is None:
                    proc.kill()
                    await asyncio.shield(proc.wait())
            finally:
                remove_quietly(output_path)
            if isinstance(exc, OSError):
                raise AudioExtractionError(
                    f"Could not run ffmpeg on {video.name}: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc
            raise

        if proc.returncode != 0:
            # Also the path taken by videos without an audio stream.
            logger.warning(
                "video_audio_extraction_failed",
                path=str(video),
                returncode=proc.returncode,
                stderr=stderr.decode(errors="replace")[-_STDERR_TAIL:],
            )
            remove_quietly(output_path)
            return None

        logger.info("video_audio_extracted", path=str(video), output=str(output_path))
        return output_path

    def get_provider_name(self) -> str:
        return "ffmpeg"

    def is_available(self) -> bool:
        return shutil.which(self._ffmpeg_binary) is not None

"""Abstract base class for video-to-audio extraction providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


# Concrete implementation: FFmpegAudioExtractor (raven_extract/providers/video/)
class IVideoAudioProvider(ABC):
    """Contract for backends that pull the audio track out of a video.

    The returned file is a temporary artifact owned by the caller, who
    must delete it once transcription has been attempted.
    """

    @abstractmethod
    async def extract_audio(self, video_path: Path) -> Path | None:
        """Write the audio track of *video_path* to a new temporary file.

        Returns ``None`` when no audio could be extracted (including videos
        without an audio track).  Implementations must not leave the
        temporary file behind in that case, nor when cancelled.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"ffmpeg"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backend binary is installed."""

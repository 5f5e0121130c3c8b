"""Video audio extraction provider implementations."""

from raven_extract.providers.video.ffmpeg_provider import FFmpegAudioExtractor

__all__ = ["FFmpegAudioExtractor"]

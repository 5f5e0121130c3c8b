"""Transcription provider implementations.

- WhisperLocalProvider -- faster-whisper on the local CPU/GPU (default).
- WhisperAPIProvider -- OpenAI's hosted Whisper; needs OPENAI_API_KEY.
"""

from raven_extract.providers.transcription.whisper_api_provider import WhisperAPIProvider
from raven_extract.providers.transcription.whisper_local_provider import WhisperLocalProvider

__all__ = ["WhisperAPIProvider", "WhisperLocalProvider"]

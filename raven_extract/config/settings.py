"""Application settings loaded from environment variables via pydantic-settings.

Two sources, highest priority first:

  1. Environment variables, e.g. ``TRANSCRIPTION_PROVIDER=whisper_api``
  2. A ``.env`` file in the working directory

Field ``openai_api_key`` maps to ``OPENAI_API_KEY`` and so on.  Defaults
apply when neither source sets a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """raven-extract settings.

    Environment variables override defaults.  Loaded from .env when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Dispatcher ===
    # 1 = strictly sequential, the safest choice for long transcriptions.
    extraction_max_concurrency: int = 1
    text_encoding: str = "utf-8"

    # === OCR ===
    ocr_languages: str = "eng"  # Tesseract language codes joined with '+'
    easyocr_enabled: bool = False

    # === Transcription ===
    transcription_provider: str = "whisper_local"
    whisper_model_size: str = "base"
    whisper_device: str = "cpu"
    whisper_compute_type: str = "int8"
    transcription_language: str = ""  # empty = auto-detect
    openai_api_key: str = ""

    # === Video ===
    ffmpeg_binary: str = "ffmpeg"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_transcription_providers(self) -> list[str]:
        """Return transcription providers usable with the current settings."""
        providers = ["whisper_local"]
        if self.openai_api_key:
            providers.append("whisper_api")
        return providers

    @property
    def easyocr_languages(self) -> list[str]:
        """EasyOCR language list derived from the Tesseract codes.

        Tesseract uses ISO 639-2 ("eng", "deu"); EasyOCR uses ISO 639-1.
        Unknown codes are passed through unchanged.
        """
        mapping = {"eng": "en", "deu": "de", "fra": "fr", "spa": "es", "ita": "it", "bos": "bs"}
        return [mapping.get(code, code) for code in self.ocr_languages.split("+") if code]

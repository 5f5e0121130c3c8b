"""OCR orchestration service with a multi-provider fallback chain.

Holds a priority-ordered list of OCR providers and tries each in turn until
one returns a result with acceptable confidence.

Each provider scores its own result.  The chain short-circuits as soon as
one meets the threshold, but keeps the best sub-threshold result, so:

    1. Preferred providers are tried first.
    2. Later providers are only paid for when the earlier ones are unsure.
    3. The caller gets *something* unless every provider hard-fails.
"""

from __future__ import annotations

from pathlib import Path

from raven_extract.interfaces.image_text_provider import IImageTextProvider, OCRResult
from raven_extract.utils.errors import OCRExtractionError
from raven_extract.utils.logging import get_logger

_DEFAULT_CONFIDENCE_THRESHOLD = 0.6


class ImageTextService:
    """Image-text capability used by the extraction dispatcher.

    Raises :class:`OCRExtractionError` only if every provider is unavailable
    or raises.
    """

    def __init__(
        self,
        providers: list[IImageTextProvider],
        min_confidence: float = _DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> None:
        self._providers = providers
        self._min_confidence = min_confidence
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def extract_text(self, image_path: Path) -> str | None:
        """Return the recognised text of *image_path*, or ``None`` if blank."""
        result = await self.extract_result(image_path)
        return result.raw_text or None

    async def extract_result(self, image_path: Path) -> OCRResult:
        """Run the provider chain on *image_path* and return the best result."""
        best_result: OCRResult | None = None

        for provider in self._providers:
            name = provider.get_provider_name()

            if not provider.is_available():
                self._logger.warning("ocr_provider_unavailable", provider=name)
                continue

            try:
                self._logger.debug("ocr_provider_attempting", provider=name, path=str(image_path))
                result = await provider.extract_text(image_path)

                if result.confidence >= self._min_confidence:
                    self._logger.info(
                        "ocr_provider_accepted",
                        provider=name,
                        confidence=round(result.confidence, 4),
                    )
                    return result

                if best_result is None or result.confidence > best_result.confidence:
                    best_result = result
                    self._logger.info(
                        "ocr_provider_below_threshold",
                        provider=name,
                        confidence=round(result.confidence, 4),
                    )

            except Exception as exc:
                # One provider failing is not fatal; the chain continues.
                self._logger.warning(
                    "ocr_provider_failed",
                    provider=name,
                    error=str(exc),
                )

        if best_result is not None:
            self._logger.info(
                "ocr_returning_best_fallback",
                provider=best_result.provider_used,
                confidence=round(best_result.confidence, 4),
            )
            return best_result

        raise OCRExtractionError(f"All OCR providers failed for {Path(image_path).name}")

    @property
    def provider_names(self) -> list[str]:
        """Names of all configured providers, in priority order."""
        return [p.get_provider_name() for p in self._providers]

    def get_available_providers(self) -> list[str]:
        """Return the names of providers that are currently available."""
        return [p.get_provider_name() for p in self._providers if p.is_available()]

"""Base translator interface."""

from abc import ABC, abstractmethod

from backpack.shared.models import DETECT, LanguageSelection, TranslationResult


class Translator(ABC):
    """Abstract base class for translators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the translator."""
        pass

    async def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str = DETECT,
    ) -> TranslationResult:
        """
        Translate text.

        Args:
            text: Text to translate, must not be blank
            target_lang: Target language code (e.g., "fr", "de")
            source_lang: Source language code or "detect" for auto-detect

        Returns:
            TranslationResult; when source_lang is "detect" the detected code
            comes from the service, otherwise it is source_lang

        Raises:
            ConnectionFailed: If the service is unreachable or answers badly
            ValueError: If text is blank or target_lang is "detect"
        """
        if not text or not text.strip():
            raise ValueError("Text to translate must not be empty")
        if not target_lang or target_lang == DETECT:
            raise ValueError(f"Invalid target language: {target_lang!r}")

        return await self._translate(text, target_lang, source_lang or DETECT)

    @abstractmethod
    async def _translate(self, text: str, target_lang: str, source_lang: str) -> TranslationResult:
        pass

    @abstractmethod
    async def supported_languages(self, display_locale: str = "en") -> list[LanguageSelection]:
        """
        Languages the service can translate to, named in display_locale.

        Raises:
            ConnectionFailed: If the list cannot be fetched
        """
        pass

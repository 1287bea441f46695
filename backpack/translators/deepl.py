"""DeepL API translator."""

import asyncio
import functools
import logging
import os

import deepl

from backpack.shared.errors import ConnectionFailed, MissingApiKey
from backpack.shared.locale import localized_name
from backpack.shared.models import DETECT, LanguageSelection, TranslationResult
from .base import Translator


logger = logging.getLogger(__name__)

API_KEY_ENV = "DEEPL_API_KEY"

# DeepL rejects bare "EN" and "PT" as target languages
TARGET_MAP = {
    "EN": "EN-US",
    "PT": "PT-BR",
}


def to_deepl_target(code: str) -> str:
    code = code.upper()
    return TARGET_MAP.get(code, code)


def to_deepl_source(code: str) -> str:
    # Source languages never carry a region
    return code.split("-")[0].split("_")[0].upper()


class DeepLTranslator(Translator):
    """Translation using DeepL API."""

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        if not self.api_key:
            raise MissingApiKey(
                f"DeepL API key required. Set {API_KEY_ENV} env var or pass api_key parameter."
            )

        self._client = deepl.Translator(self.api_key)

    @property
    def name(self) -> str:
        return "DeepL"

    async def _run(self, func, *args, **kwargs):
        """Run a blocking SDK call off the event loop."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except deepl.DeepLException as e:
            logger.error("DeepL request failed: %s", e)
            raise ConnectionFailed(f"DeepL error: {e}") from e

    async def _translate(self, text: str, target_lang: str, source_lang: str) -> TranslationResult:
        result = await self._run(
            self._client.translate_text,
            text,
            target_lang=to_deepl_target(target_lang),
            source_lang=to_deepl_source(source_lang) if source_lang != DETECT else None,
        )

        translated = getattr(result, "text", None)
        if source_lang == DETECT:
            detected = (getattr(result, "detected_source_lang", None) or "").lower()
        else:
            detected = source_lang

        if not translated or not detected:
            logger.error("Incomplete DeepL response: %r", result)
            raise ConnectionFailed("Incomplete DeepL response")

        return TranslationResult(
            translated_text=translated,
            detected_source_language_code=detected,
        )

    async def supported_languages(self, display_locale: str = "en") -> list[LanguageSelection]:
        entries = await self._run(self._client.get_target_languages)

        languages = []
        for entry in entries:
            code = entry.code.lower()
            name = localized_name(code, display_locale)
            languages.append(LanguageSelection(code, entry.name if name == code else name))

        return sorted(languages, key=lambda lang: lang.display_name)

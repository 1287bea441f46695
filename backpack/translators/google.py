"""Google Cloud Translation (v2 REST API)."""

import logging
import os

import httpx

from backpack.shared.errors import ConnectionFailed, MissingApiKey
from backpack.shared.models import DETECT, LanguageSelection, TranslationResult
from .base import Translator


logger = logging.getLogger(__name__)

API_KEY_ENV = "GOOGLE_TRANSLATE_API_KEY"
DEFAULT_BASE_URL = "https://translation.googleapis.com/language/translate/v2"


class GoogleTranslator(Translator):
    """Translation using the Google Cloud Translation API with an API key."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        if not self.api_key:
            raise MissingApiKey(
                f"Google Translate API key required. Set {API_KEY_ENV} env var or pass api_key parameter."
            )

        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def name(self) -> str:
        return "Google Translate"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    async def _translate(self, text: str, target_lang: str, source_lang: str) -> TranslationResult:
        payload = {
            "q": text,
            "target": target_lang,
            "format": "text",
        }
        if source_lang != DETECT:
            payload["source"] = source_lang

        try:
            async with self._client() as client:
                response = await client.post(
                    self.base_url,
                    params={"key": self.api_key},
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Google Translate request failed: %s", e)
            raise ConnectionFailed(f"Google Translate error: {e}") from e

        return self._parse_translation(data, source_lang)

    @staticmethod
    def _parse_translation(data: dict, source_lang: str) -> TranslationResult:
        try:
            translation = data["data"]["translations"][0]
            translated = translation["translatedText"]
            detected = translation.get("detectedSourceLanguage") if source_lang == DETECT else source_lang
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error("Malformed Google Translate response: %r", data)
            raise ConnectionFailed("Malformed Google Translate response") from e

        if not translated or not detected or detected == DETECT:
            logger.error("Incomplete Google Translate response: %r", data)
            raise ConnectionFailed("Incomplete Google Translate response")

        return TranslationResult(
            translated_text=translated,
            detected_source_language_code=detected,
        )

    async def supported_languages(self, display_locale: str = "en") -> list[LanguageSelection]:
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.base_url}/languages",
                    params={"key": self.api_key, "target": display_locale},
                )
                response.raise_for_status()
                entries = response.json()["data"]["languages"]
            languages = [LanguageSelection(e["language"], e.get("name") or e["language"]) for e in entries]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error("Could not fetch Google Translate languages: %s", e)
            raise ConnectionFailed(f"Google Translate error: {e}") from e

        return sorted(languages, key=lambda lang: lang.display_name)

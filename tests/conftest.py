"""Shared fakes for the test suite."""

import inspect

import pytest

from backpack.client.session import TranslateView
from backpack.shared.models import DETECT, LanguageSelection, TranslationResult
from backpack.translators.base import Translator


PHRASES = {
    ("Hello", "fr"): "Bonjour",
    ("Hello", "de"): "Hallo",
    ("Hello", "es"): "Hola",
    ("Bonjour", "en"): "Hello",
}

NAMES = {"en": "English", "fr": "French", "de": "German", "es": "Spanish"}


class FakeTranslator(Translator):
    """In-memory translator; ``handler`` may replace the phrase book."""

    name = "Fake"

    def __init__(self, handler=None):
        self.handler = handler
        self.calls = []

    async def _translate(self, text, target_lang, source_lang):
        self.calls.append((text, target_lang, source_lang))
        if self.handler is not None:
            result = self.handler(text, target_lang, source_lang)
            if inspect.isawaitable(result):
                result = await result
            return result

        detected = "en" if source_lang == DETECT else source_lang
        return TranslationResult(PHRASES[(text, target_lang)], detected)

    async def supported_languages(self, display_locale="en"):
        return [LanguageSelection(code, name) for code, name in sorted(NAMES.items(), key=lambda i: i[1])]


class RecordingView(TranslateView):
    def __init__(self):
        self.states = []
        self.alerts = []

    def render(self, state):
        self.states.append(state)

    def show_alert(self, kind):
        self.alerts.append(kind)


def localized_fake_name(code):
    return NAMES.get(code, code)


@pytest.fixture
def fake_name():
    return localized_fake_name


@pytest.fixture
def make_translator():
    """Build a FakeTranslator, optionally with a custom handler."""
    return FakeTranslator


@pytest.fixture
def translator(make_translator):
    return make_translator()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    for var in ("GOOGLE_TRANSLATE_API_KEY", "DEEPL_API_KEY", "FIXER_API_KEY"):
        monkeypatch.delenv(var, raising=False)

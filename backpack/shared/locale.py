"""
Locale lookups backed by Babel.

These are plain functions so they can be injected where the session or the
currency model needs a display name.
"""

from functools import lru_cache

from babel import Locale, UnknownLocaleError

from .models import DETECT, DETECT_LANGUAGE, LanguageSelection


DEFAULT_DISPLAY_LOCALE = "en"


@lru_cache(maxsize=None)
def _display_locale(identifier: str) -> Locale:
    return Locale.parse(identifier, sep="_" if "_" in identifier else "-")


def localized_name(code: str, display_locale: str = DEFAULT_DISPLAY_LOCALE) -> str:
    """
    Human readable name of a language code, e.g. "fr" -> "French".

    Accepts plain codes ("de") and region/script variants ("zh-CN", "pt_BR").
    Unknown codes are returned unchanged.
    """
    if code == DETECT:
        return DETECT_LANGUAGE.display_name

    display = _display_locale(display_locale)
    key = code.replace("-", "_")
    name = display.languages.get(key) or display.languages.get(key.lower())
    if name:
        return name[0].upper() + name[1:]

    try:
        sep = "-" if "-" in code else "_"
        locale = Locale.parse(code, sep=sep)
    except (ValueError, UnknownLocaleError):
        return code
    return locale.get_display_name(display) or code


def language(code: str, display_locale: str = DEFAULT_DISPLAY_LOCALE) -> LanguageSelection:
    """Build a selection with its localized display name."""
    if code == DETECT:
        return DETECT_LANGUAGE
    return LanguageSelection(code, localized_name(code, display_locale))

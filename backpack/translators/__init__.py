"""
Translator factory and exports.

Usage:
    from backpack.translators import create_translator

    translator = create_translator("google", api_key="...")
    result = await translator.translate("Hello", "fr")
"""

from backpack.shared.errors import ServiceError, ConnectionFailed, MissingApiKey
from .base import Translator


def _get_google_class():
    from .google import GoogleTranslator
    return GoogleTranslator


def _get_deepl_class():
    from .deepl import DeepLTranslator
    return DeepLTranslator


TRANSLATOR_REGISTRY = {
    "google": _get_google_class,
    "deepl": _get_deepl_class,
}

DEFAULT_PROVIDER = "google"


def create_translator(provider: str = DEFAULT_PROVIDER, **kwargs) -> Translator:
    """
    Create a translator by provider name.

    Raises:
        ValueError: If provider is not supported
        MissingApiKey: If no API key is configured for the provider
    """
    if provider not in TRANSLATOR_REGISTRY:
        available = ", ".join(TRANSLATOR_REGISTRY.keys())
        raise ValueError(f"Unknown translation provider: {provider}. Available: {available}")

    translator_class = TRANSLATOR_REGISTRY[provider]()
    return translator_class(**kwargs)


def list_providers() -> list[str]:
    """List available translation providers."""
    return list(TRANSLATOR_REGISTRY.keys())


__all__ = [
    "Translator",
    "ServiceError",
    "ConnectionFailed",
    "MissingApiKey",
    "create_translator",
    "list_providers",
    "DEFAULT_PROVIDER",
]

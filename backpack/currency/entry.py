"""
Currency entries built from locale data.

An entry is created from a locale identifier such as "fr_FR"; its currency,
symbol and country code come from Babel. Only ``rate`` and ``formatted_amount``
change after construction.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    format_decimal,
    get_currency_name,
    get_currency_symbol,
    get_territory_currencies,
)


EURO = "EUR"
AUSTRALIAN_DOLLAR = "AUD"
EURO_NAME = "Euro Member Countries"

# Country codes that differ from the locale's territory
COUNTRY_CODE_OVERRIDES = {
    EURO: "EU",
    AUSTRALIAN_DOLLAR: "AU",
}

DEFAULT_DISPLAY_LOCALE = "en_US"

DEFAULT_COUNTRY_IDS = [
    "en_US",
    "fr_FR",
    "en_GB",
    "de_CH",
    "ja_JP",
    "en_CA",
    "en_AU",
    "zh_CN",
]


def format_amount(value: Decimal | float | int, locale: str = DEFAULT_DISPLAY_LOCALE) -> str:
    """Format an amount with grouping and exactly two fraction digits."""
    return format_decimal(value, format="#,##0.00", locale=locale)


@dataclass
class CurrencyEntry:
    country_id: str
    iso_code: str
    display_name: str
    symbol: str
    country_code: str
    rate: float = 0.0
    formatted_amount: str = field(default_factory=lambda: format_amount(0))

    @classmethod
    def from_locale(cls, country_id: str, display_locale: str = DEFAULT_DISPLAY_LOCALE) -> "CurrencyEntry":
        """
        Build an entry from a locale identifier.

        Raises:
            ValueError: If the identifier is unknown, has no territory or the
                territory no currency
        """
        try:
            locale = Locale.parse(country_id)
        except UnknownLocaleError as e:
            raise ValueError(f"Unknown locale {country_id!r}") from e
        if not locale.territory:
            raise ValueError(f"Locale {country_id!r} has no territory")

        currencies = get_territory_currencies(locale.territory)
        if not currencies:
            raise ValueError(f"No currency in use for territory {locale.territory!r}")
        code = currencies[0]

        if code == EURO:
            name = EURO_NAME
        else:
            name = get_currency_name(code, locale=display_locale)

        return cls(
            country_id=country_id,
            iso_code=code,
            display_name=name,
            symbol=get_currency_symbol(code, locale=locale),
            country_code=COUNTRY_CODE_OVERRIDES.get(code, locale.territory),
            formatted_amount=format_amount(0, display_locale),
        )

    @property
    def has_rate(self) -> bool:
        return self.rate > 0


def default_entries(display_locale: str = DEFAULT_DISPLAY_LOCALE) -> list[CurrencyEntry]:
    return [CurrencyEntry.from_locale(country_id, display_locale) for country_id in DEFAULT_COUNTRY_IDS]

"""Exchange rates from a Fixer compatible API, and conversion between entries."""

import logging
import os
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

import httpx

from backpack.shared.errors import ConnectionFailed, MissingApiKey
from .entry import CurrencyEntry, DEFAULT_DISPLAY_LOCALE, format_amount


logger = logging.getLogger(__name__)

API_KEY_ENV = "FIXER_API_KEY"
DEFAULT_BASE_URL = "http://data.fixer.io/api"

CENT = Decimal("0.01")


class RateService:
    """Fetches the latest rates relative to the API's base currency."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        if not self.api_key:
            raise MissingApiKey(
                f"Exchange rate API key required. Set {API_KEY_ENV} env var or pass api_key parameter."
            )

        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def latest(self, symbols: Iterable[str] | None = None) -> dict[str, float]:
        """
        Latest rates keyed by ISO code.

        Raises:
            ConnectionFailed: On network, HTTP or payload failure
        """
        params = {"access_key": self.api_key}
        if symbols:
            params["symbols"] = ",".join(sorted(set(symbols)))

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(f"{self.base_url}/latest", params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Exchange rate request failed: %s", e)
            raise ConnectionFailed(f"Exchange rate error: {e}") from e

        if not isinstance(data, dict) or not data.get("success"):
            error = data.get("error") if isinstance(data, dict) else data
            logger.error("Exchange rate API refused request: %r", error)
            raise ConnectionFailed(f"Exchange rate API error: {error}")

        rates = data.get("rates")
        if not isinstance(rates, dict):
            raise ConnectionFailed("Malformed exchange rate response")

        try:
            return {code: float(rate) for code, rate in rates.items()}
        except (TypeError, ValueError) as e:
            raise ConnectionFailed("Malformed exchange rate response") from e

    async def refresh(self, entries: list[CurrencyEntry]) -> list[CurrencyEntry]:
        """Fetch rates for entries and store them in place."""
        rates = await self.latest(entry.iso_code for entry in entries)
        return apply_rates(entries, rates)


def apply_rates(entries: list[CurrencyEntry], rates: dict[str, float]) -> list[CurrencyEntry]:
    for entry in entries:
        rate = rates.get(entry.iso_code)
        if rate is None:
            logger.warning("No rate for %s", entry.iso_code)
            continue
        entry.rate = rate
    return entries


def convert(amount: Decimal | float | int, source: CurrencyEntry, target: CurrencyEntry) -> Decimal:
    """
    Convert amount from source to target currency, rounded to cents.

    Raises:
        ValueError: If either entry has no rate yet
    """
    for entry in (source, target):
        if not entry.has_rate:
            raise ValueError(f"No exchange rate for {entry.iso_code}")

    value = Decimal(str(amount)) / Decimal(str(source.rate)) * Decimal(str(target.rate))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def update_amounts(
    amount: Decimal | float | int,
    source: CurrencyEntry,
    entries: list[CurrencyEntry],
    display_locale: str = DEFAULT_DISPLAY_LOCALE,
) -> list[CurrencyEntry]:
    """Set formatted_amount on every entry that has a rate for amount in source."""
    source.formatted_amount = format_amount(Decimal(str(amount)), display_locale)
    for entry in entries:
        if entry is source or not entry.has_rate or not source.has_rate:
            continue
        entry.formatted_amount = format_amount(convert(amount, source, entry), display_locale)
    return entries

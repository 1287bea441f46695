from .entry import CurrencyEntry, DEFAULT_COUNTRY_IDS, default_entries, format_amount
from .rates import RateService, apply_rates, convert, update_amounts

__all__ = [
    "CurrencyEntry",
    "DEFAULT_COUNTRY_IDS",
    "default_entries",
    "format_amount",
    "RateService",
    "apply_rates",
    "convert",
    "update_amounts",
]

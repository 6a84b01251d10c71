"""Currency -- code validation and precision lookup."""

import re
from dataclasses import dataclass
from typing import ClassVar

from portfolio_kernel.exceptions import InvalidCurrencyError

_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single known currency."""

    code: str
    decimal_places: int
    name: str


class CurrencyRegistry:
    """
    Registry of well-known currencies with ISO 4217 decimal places.

    Codes are accepted when they are ISO-4217-like (three letters).
    Membership in the registry only supplies a name and the number of
    minor-unit digits; unknown codes fall back to DEFAULT_DECIMAL_PLACES.
    """

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        "USD": CurrencyInfo("USD", 2, "US Dollar"),
        "EUR": CurrencyInfo("EUR", 2, "Euro"),
        "GBP": CurrencyInfo("GBP", 2, "Pound Sterling"),
        "CHF": CurrencyInfo("CHF", 2, "Swiss Franc"),
        "CAD": CurrencyInfo("CAD", 2, "Canadian Dollar"),
        "AUD": CurrencyInfo("AUD", 2, "Australian Dollar"),
        "CNY": CurrencyInfo("CNY", 2, "Chinese Yuan"),
        "INR": CurrencyInfo("INR", 2, "Indian Rupee"),
        # Zero decimal currencies
        "JPY": CurrencyInfo("JPY", 0, "Japanese Yen"),
        "KRW": CurrencyInfo("KRW", 0, "South Korean Won"),
        "CLP": CurrencyInfo("CLP", 0, "Chilean Peso"),
        "ISK": CurrencyInfo("ISK", 0, "Icelandic Krona"),
        "VND": CurrencyInfo("VND", 0, "Vietnamese Dong"),
        # Three decimal currencies
        "BHD": CurrencyInfo("BHD", 3, "Bahraini Dinar"),
        "KWD": CurrencyInfo("KWD", 3, "Kuwaiti Dinar"),
        "OMR": CurrencyInfo("OMR", 3, "Omani Rial"),
        "TND": CurrencyInfo("TND", 3, "Tunisian Dinar"),
    }

    DEFAULT_DECIMAL_PLACES: ClassVar[int] = 2

    @staticmethod
    def normalize(code: object) -> str:
        """Strip and upper-case a code without validating it."""
        if not isinstance(code, str):
            return ""
        return code.strip().upper()

    @classmethod
    def is_valid(cls, code: object) -> bool:
        """Check if a currency code is ISO-4217-like."""
        return bool(_CODE_PATTERN.match(cls.normalize(code)))

    @classmethod
    def is_known(cls, code: object) -> bool:
        """Check if a code is present in the registry."""
        return cls.normalize(code) in cls._CURRENCIES

    @classmethod
    def validate(cls, code: object) -> str:
        """
        Validate and normalize a currency code.

        Raises:
            InvalidCurrencyError: If the code is empty, not a string, or not
                exactly three letters after normalization.
        """
        if not isinstance(code, str) or not code.strip():
            raise InvalidCurrencyError(code, "code is required")

        normalized = cls.normalize(code)
        if len(normalized) != 3:
            raise InvalidCurrencyError(code, "must be 3 characters")
        if not _CODE_PATTERN.match(normalized):
            raise InvalidCurrencyError(code, "must contain only letters")
        return normalized

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Get currency information by code."""
        return cls._CURRENCIES.get(cls.normalize(code))

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        """Get decimal places for a currency, defaulting for unknown codes."""
        info = cls.get_info(code)
        return info.decimal_places if info else cls.DEFAULT_DECIMAL_PLACES

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """Get all registered currency codes."""
        return frozenset(cls._CURRENCIES)

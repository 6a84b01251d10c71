"""
portfolio_config -- YAML rate sheets for building a Bank.

Responsibility:
    Turns a rate sheet (``RateSheet``) into a populated ``Bank``. The
    kernel never imports from this package; the dependency only points
    from config to kernel.

Failure modes:
    - ``FileNotFoundError`` / ``yaml.YAMLError`` from loading.
    - ``KeyError`` / ``ValueError`` from parsing.
    - ``InvalidExchangeRateError`` / ``InvalidCurrencyError`` when a
      parsed rate is rejected by the Bank.
"""

from __future__ import annotations

from pathlib import Path

from portfolio_config.loader import (
    compute_checksum,
    load_rate_sheet,
    parse_rate_sheet,
)
from portfolio_config.schema import RateDef, RateSheet
from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.logging_config import LogContext, get_logger

_logger = get_logger("config")

# Default rate sheets directory
_DEFAULT_SETS_DIR = Path(__file__).parent / "sets"

__all__ = [
    "RateDef",
    "RateSheet",
    "build_bank",
    "compute_checksum",
    "get_default_bank",
    "load_bank",
    "load_rate_sheet",
    "parse_rate_sheet",
]


def build_bank(sheet: RateSheet) -> Bank:
    """Register every rate of ``sheet`` on a fresh Bank, in file order."""
    bank = Bank()
    with LogContext.bind(rate_sheet=sheet.name):
        for rate in sheet.rates:
            bank.add_exchange_rate(rate.from_currency, rate.to_currency, rate.rate)

        _logger.info(
            "rate_sheet_loaded",
            extra={
                "rate_count": len(sheet.rates),
                "checksum": sheet.checksum,
            },
        )
    return bank


def load_bank(path: Path | str) -> Bank:
    """Load a rate sheet file and build a Bank from it."""
    return build_bank(load_rate_sheet(path))


def get_default_bank(sets_dir: Path | None = None) -> Bank:
    """Build a Bank from the packaged ``default.yaml`` rate sheet."""
    return load_bank((sets_dir or _DEFAULT_SETS_DIR) / "default.yaml")

"""
Rate sheet schema.

A rate sheet is the human-authored source artifact for exchange rates.
YAML files are parsed into these types by the loader and turned into a
populated Bank by ``portfolio_config.build_bank``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RateDef:
    """One directed rate: 1 ``from_currency`` = ``rate`` ``to_currency``."""

    from_currency: str
    to_currency: str
    rate: Decimal


@dataclass(frozen=True)
class RateSheet:
    """A named, checksummed set of exchange rates."""

    name: str
    rates: tuple[RateDef, ...] = ()
    description: str = ""
    checksum: str = ""

    @property
    def pairs(self) -> tuple[str, ...]:
        return tuple(f"{r.from_currency}->{r.to_currency}" for r in self.rates)

"""
Bank -- directed exchange-rate table and single-item conversion.

Responsibility:
    Owns the exchange-rate registrations and converts one Money value
    into a target currency.

Architecture position:
    Kernel > Domain. Depends on values and exceptions only. Portfolio
    calls ``convert`` once per item during evaluation.

Invariants enforced:
    - Rates are directed: registering EUR->USD says nothing about USD->EUR.
    - Only directly registered pairs convert; there is no cross-rate
      inference through a third currency.
    - Identity conversion never consults the table and never fails.
    - The table is mutated only through ``add_exchange_rate`` and is read
      and written under one lock.

Failure modes:
    - InvalidExchangeRateError from ``add_exchange_rate`` for a zero,
      negative, or non-numeric rate or a same-currency pair.
    - MissingExchangeRateError from ``convert`` when the pair is absent.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from portfolio_kernel.domain.values import Currency, ExchangeRate, Money, Number
from portfolio_kernel.exceptions import MissingExchangeRateError
from portfolio_kernel.logging_config import get_logger

logger = get_logger("domain.bank")

RateKey = tuple[str, str]


class Bank:
    """
    Holder of exchange-rate registrations.

    Contract:
        ``convert(money, target)`` returns ``money`` itself when the
        currencies match, ``money.amount * rate`` in ``target`` when a
        direct rate is registered, and raises MissingExchangeRateError
        otherwise.

    Guarantees:
        - Registering the same pair twice overwrites the earlier rate.
        - ``rates()`` returns a read-only snapshot; later registrations
          do not show through it.
    """

    def __init__(self) -> None:
        self._rates: dict[RateKey, ExchangeRate] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_rates(cls, rates: Iterable[ExchangeRate]) -> Bank:
        """Build a Bank pre-populated with the given rates, in order."""
        bank = cls()
        for rate in rates:
            bank.register(rate)
        return bank

    def add_exchange_rate(
        self,
        from_currency: str | Currency,
        to_currency: str | Currency,
        rate: Number,
    ) -> ExchangeRate:
        """
        Register (or overwrite) the rate for an ordered currency pair.

        Raises:
            InvalidExchangeRateError: If the rate is not strictly positive
                or both currencies are the same.
            InvalidCurrencyError: If either code is malformed.
        """
        return self.register(ExchangeRate.of(from_currency, to_currency, rate))

    def register(self, rate: ExchangeRate) -> ExchangeRate:
        """Register an already-validated ExchangeRate."""
        key = (rate.from_currency.code, rate.to_currency.code)
        with self._lock:
            previous = self._rates.get(key)
            self._rates[key] = rate

        logger.debug(
            "exchange_rate_registered",
            extra={
                "pair": rate.pair,
                "rate": rate.rate,
                "replaced": previous is not None,
            },
        )
        return rate

    def get_rate(
        self, from_currency: str | Currency, to_currency: str | Currency
    ) -> ExchangeRate | None:
        """Return the registered rate for the pair, or None."""
        key = (Currency.coerce(from_currency).code, Currency.coerce(to_currency).code)
        with self._lock:
            return self._rates.get(key)

    def has_rate(
        self, from_currency: str | Currency, to_currency: str | Currency
    ) -> bool:
        return self.get_rate(from_currency, to_currency) is not None

    def convert(self, money: Money, to_currency: str | Currency) -> Money:
        """
        Convert a Money value into ``to_currency``.

        Raises:
            MissingExchangeRateError: If the currencies differ and no
                direct rate is registered for the pair.
        """
        target = Currency.coerce(to_currency)
        if money.currency == target:
            return money

        rate = self.get_rate(money.currency, target)
        if rate is None:
            logger.debug(
                "conversion_failed",
                extra={"pair": f"{money.currency.code}->{target.code}"},
            )
            raise MissingExchangeRateError(money.currency.code, target.code)

        return rate.convert(money)

    def rates(self) -> Mapping[RateKey, ExchangeRate]:
        """Read-only snapshot of the current rate table."""
        with self._lock:
            return MappingProxyType(dict(self._rates))

    def __len__(self) -> int:
        with self._lock:
            return len(self._rates)

    def __repr__(self) -> str:
        return f"Bank(rates={len(self)})"

"""
Portfolio -- ordered Money collection evaluated through a Bank.

Responsibility:
    Aggregates Money values held in possibly different currencies into a
    single total in a caller-chosen currency.

Architecture position:
    Kernel > Domain. Reads from Bank; never mutates it.

Invariants enforced:
    - ``add`` returns a new Portfolio; the receiver is unchanged.
    - ``evaluate`` is collect-all: every item is attempted even after a
      conversion fails, and all missing pairs are reported together in
      encounter order.
    - ``evaluate`` is all-or-nothing: a partial total is never returned.

Failure modes:
    - TypeError when constructed with anything other than Money items.
    - MissingExchangeRatesError when at least one item cannot be converted.
    - InvalidAmountError when the exact total overflows or needs rounding.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from uuid import uuid4

from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.domain.values import Currency, Money
from portfolio_kernel.exceptions import (
    MissingExchangeRateError,
    MissingExchangeRatesError,
)
from portfolio_kernel.logging_config import LogContext, get_logger

logger = get_logger("domain.portfolio")


@dataclass(frozen=True, slots=True)
class Portfolio:
    """
    Immutable, ordered collection of Money values.

    Duplicates are allowed and items have no identity beyond position.
    """

    items: tuple[Money, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Money):
                raise TypeError(
                    f"Portfolio items must be Money, got {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    @classmethod
    def of(cls, *moneys: Money) -> Portfolio:
        return cls(items=moneys)

    def add(self, money: Money) -> Portfolio:
        """Return a new Portfolio with ``money`` appended."""
        return Portfolio(items=self.items + (money,))

    def currencies(self) -> tuple[Currency, ...]:
        """Distinct currencies held, in first-seen order."""
        return tuple(dict.fromkeys(m.currency for m in self.items))

    def evaluate(self, bank: Bank, currency: str | Currency) -> Money:
        """
        Total value of the portfolio in ``currency``.

        Every item is converted through ``bank``. Items whose pair has no
        registered rate are collected rather than aborting the loop.

        Returns:
            Money holding the sum of all converted amounts.

        Raises:
            MissingExchangeRatesError: If any item could not be converted.
                Its message is ``Missing exchange rate(s):[A->B,C->B]``.
        """
        target = Currency.coerce(currency)
        total = Money.zero(target)
        failed_conversions: list[str] = []

        with LogContext.bind(evaluation_id=uuid4().hex):
            for money in self.items:
                try:
                    converted = bank.convert(money, target)
                except MissingExchangeRateError as e:
                    failed_conversions.append(e.pair)
                    continue
                total = total + converted

            if failed_conversions:
                logger.warning(
                    "portfolio_evaluation_failed",
                    extra={
                        "target_currency": target.code,
                        "item_count": len(self.items),
                        "missing_pairs": failed_conversions,
                    },
                )
                raise MissingExchangeRatesError(failed_conversions)

            logger.info(
                "portfolio_evaluated",
                extra={
                    "target_currency": target.code,
                    "item_count": len(self.items),
                    "total": total.amount,
                },
            )
            return total

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Money]:
        return iter(self.items)

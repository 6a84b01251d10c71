"""
Portfolio Kernel - multi-currency money arithmetic

A small, pure library with:
- Immutable Decimal-backed Money values tagged with a currency
- A Bank holding directed exchange rates
- Portfolio evaluation with collect-all reporting of missing rates
"""

from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.domain.portfolio import Portfolio
from portfolio_kernel.domain.values import Currency, ExchangeRate, Money

__version__ = "0.1.0"

__all__ = [
    "Bank",
    "Currency",
    "ExchangeRate",
    "Money",
    "Portfolio",
]

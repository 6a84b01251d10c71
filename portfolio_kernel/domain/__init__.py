"""
Pure domain layer.

Value objects and the Bank/Portfolio logic, with NO dependencies on
I/O, configuration files, or the clock. Everything except the Bank's
rate table is immutable.
"""

from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from portfolio_kernel.domain.portfolio import Portfolio
from portfolio_kernel.domain.values import Currency, ExchangeRate, Money, to_decimal

__all__ = [
    # Value Objects
    "Currency",
    "Money",
    "ExchangeRate",
    "to_decimal",
    # Registry
    "CurrencyInfo",
    "CurrencyRegistry",
    # Services
    "Bank",
    "Portfolio",
]

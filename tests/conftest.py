"""
Pytest fixtures for the portfolio kernel test suite.

Provides:
- Banks with and without the reference rates
- Clean logging state between tests
"""

import pytest

from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.domain.portfolio import Portfolio
from portfolio_kernel.domain.values import Money
from portfolio_kernel.logging_config import LogContext, reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def empty_bank() -> Bank:
    return Bank()


@pytest.fixture
def bank() -> Bank:
    """Bank with EUR->USD = 1.2 and USD->KRW = 1100."""
    b = Bank()
    b.add_exchange_rate("EUR", "USD", "1.2")
    b.add_exchange_rate("USD", "KRW", 1100)
    return b


@pytest.fixture
def mixed_portfolio() -> Portfolio:
    """[5 USD, 10 EUR]"""
    return Portfolio().add(Money(5, "USD")).add(Money(10, "EUR"))

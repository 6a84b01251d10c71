"""
Typed Exception Hierarchy for the Portfolio Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to react to a missing exchange rate differently from a
malformed amount. Matching on message text is fragile, so:
  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, log-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example - WRONG way:
    try:
        total = portfolio.evaluate(bank, "USD")
    except Exception as e:
        if "Missing exchange" in str(e):
            ...

Example - RIGHT way:
    try:
        total = portfolio.evaluate(bank, "USD")
    except MissingExchangeRatesError as e:
        for pair in e.pairs:
            request_rate(pair)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from PortfolioKernelError:

    PortfolioKernelError (base)
    |
    +-- MoneyError
    |   +-- InvalidAmountError
    |   +-- DivisionByZeroError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- CurrencyMismatchError
    |
    +-- ExchangeRateError
        +-- InvalidExchangeRateError
        +-- MissingExchangeRateError
        +-- MissingExchangeRatesError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                   | When Raised
----------------|------------------------|--------------------------------------
Money           | INVALID_AMOUNT         | Amount is not a finite number
                | DIVISION_BY_ZERO       | Money.divide(0)
----------------|------------------------|--------------------------------------
Currency        | INVALID_CURRENCY       | Code is not three letters
                | CURRENCY_MISMATCH      | Adding/subtracting mixed currencies
----------------|------------------------|--------------------------------------
Exchange Rate   | INVALID_EXCHANGE_RATE  | Rate is zero/negative/non-finite
                | MISSING_EXCHANGE_RATE  | Bank has no direct rate for a pair
                | MISSING_EXCHANGE_RATES | Portfolio evaluation hit >=1 gap

===============================================================================
"""


class PortfolioKernelError(Exception):
    """
    Base exception for all portfolio kernel errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "PORTFOLIO_KERNEL_ERROR"


# Money-related exceptions


class MoneyError(PortfolioKernelError):
    """Base exception for money arithmetic errors."""

    code: str = "MONEY_ERROR"


class InvalidAmountError(MoneyError):
    """Amount cannot be represented exactly as a finite Decimal."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: object, reason: str = "not a finite number"):
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class DivisionByZeroError(MoneyError):
    """Attempted to divide a Money value by zero."""

    code: str = "DIVISION_BY_ZERO"

    def __init__(self, amount: str, currency: str):
        self.amount = amount
        self.currency = currency
        super().__init__(f"Cannot divide {amount} {currency} by zero")


# Currency-related exceptions


class CurrencyError(PortfolioKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Invalid currency code provided."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: object, reason: str = "must be 3 letters"):
        self.currency = currency
        self.reason = reason
        super().__init__(f"Invalid currency code {currency!r}: {reason}")


class CurrencyMismatchError(CurrencyError):
    """Attempted operation on mismatched currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str):
        self.currency1 = currency1
        self.currency2 = currency2
        super().__init__(f"Currency mismatch: {currency1} vs {currency2}")


# Exchange rate related exceptions


class ExchangeRateError(PortfolioKernelError):
    """Base exception for exchange rate related errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class InvalidExchangeRateError(ExchangeRateError):
    """
    Exchange rate value is invalid (zero, negative, or not a number).

    A rate of zero would wipe out any converted value and negative rates
    are meaningless, so both are rejected at registration.
    """

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, rate_value: str, reason: str):
        self.rate_value = rate_value
        self.reason = reason
        super().__init__(f"Invalid exchange rate value {rate_value}: {reason}")


class MissingExchangeRateError(ExchangeRateError):
    """
    No direct exchange rate is registered for the currency pair.

    Identity conversions never raise this. The pair is exposed in the
    ``"<from>-><to>"`` form used by aggregated portfolio failures.
    """

    code: str = "MISSING_EXCHANGE_RATE"

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.pair = f"{from_currency}->{to_currency}"
        super().__init__(f"Missing exchange rate: {self.pair}")


class MissingExchangeRatesError(ExchangeRateError):
    """
    One portfolio evaluation encountered one or more missing rates.

    ``pairs`` keeps the encounter order of the failing items; duplicates
    are kept when several items share a missing pair.
    """

    code: str = "MISSING_EXCHANGE_RATES"

    def __init__(self, pairs: list[str] | tuple[str, ...]):
        self.pairs = tuple(pairs)
        super().__init__(f"Missing exchange rate(s):[{','.join(self.pairs)}]")

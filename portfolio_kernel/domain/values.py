"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the value types every other module computes with: Currency,
    Money, and ExchangeRate.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by Bank and Portfolio. No outward dependencies except
    portfolio_kernel.domain.currency and portfolio_kernel.exceptions.

Invariants enforced:
    - Money pairs a finite Decimal amount with a Currency; the two are
      never separated.
    - Every operation returns a new instance; nothing mutates after
      construction.
    - Equality is exact Decimal equality, so Money(17, "USD") equals
      Money("17.0", "USD").

Failure modes:
    - InvalidAmountError on construction with NaN, infinity, garbage, or more
      than MONEY_PRECISION significant digits
    - InvalidAmountError when a sum, product or conversion would round or
      overflow
    - InvalidCurrencyError on a malformed currency code
    - DivisionByZeroError from Money.divide(0)
    - CurrencyMismatchError when arithmetic mixes currencies
    - InvalidExchangeRateError when a rate is not strictly positive
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)

from portfolio_kernel.domain.currency import CurrencyRegistry
from portfolio_kernel.exceptions import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidAmountError,
    InvalidExchangeRateError,
)

Number = Decimal | int | float | str

MONEY_PRECISION = 28

# Sums, products and conversions never round.
_EXACT = Context(
    prec=MONEY_PRECISION,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)
# Quotients and explicit rounding may round, but never overflow.
_ROUNDED = Context(
    prec=MONEY_PRECISION,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def to_decimal(value: object) -> Decimal:
    """
    Convert a number to a finite Decimal.

    Floats go through ``str`` so ``1.2`` becomes ``Decimal("1.2")`` rather
    than its binary expansion. At most ``MONEY_PRECISION`` significant
    digits are accepted; trailing zeros of the coefficient do not count.

    Raises:
        InvalidAmountError: If the value is not numeric, not finite, too
            precise, or out of range.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(value, "not a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(value, "not a number") from e
    else:
        raise InvalidAmountError(value, "not a number")

    if not result.is_finite():
        raise InvalidAmountError(value)
    significant = "".join(map(str, result.as_tuple().digits)).strip("0")
    if len(significant) > MONEY_PRECISION:
        raise InvalidAmountError(
            value, f"more than {MONEY_PRECISION} significant digits"
        )
    if result and result.adjusted() > _EXACT.Emax:
        raise InvalidAmountError(value, "out of range")
    return result


def _apply(
    operation: Callable[[Decimal, Decimal], Decimal],
    left: Decimal,
    right: Decimal,
    symbol: str,
) -> Decimal:
    """Run a context operation, turning decimal signals into InvalidAmountError."""
    try:
        return operation(left, right)
    except DecimalException as e:
        if isinstance(e, Overflow):
            reason = "result out of range"
        else:
            reason = f"result needs more than {MONEY_PRECISION} significant digits"
        raise InvalidAmountError(f"{left} {symbol} {right}", reason) from e


@dataclass(frozen=True, slots=True)
class Currency:
    """
    Currency code value object.

    Contract:
        Wraps a three-letter code. Normalized (stripped, uppercased) on
        construction. Malformed codes are rejected immediately.

    Non-goals:
        - Does NOT store exchange rates (that is the Bank's job)
    """

    code: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", CurrencyRegistry.validate(self.code))

    @classmethod
    def coerce(cls, value: str | Currency) -> Currency:
        """Accept either a code or an existing Currency."""
        if isinstance(value, Currency):
            return value
        return cls(value)

    @property
    def decimal_places(self) -> int:
        return CurrencyRegistry.get_decimal_places(self.code)

    @property
    def name(self) -> str:
        info = CurrencyRegistry.get_info(self.code)
        return info.name if info else self.code

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Contract:
        Pairs a Decimal amount with its Currency. Accepts Decimal, int,
        float, or str amounts and str or Currency currencies at the
        boundary; stores only Decimal and Currency.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount is always a finite Decimal
        - Arithmetic never mixes currencies silently

    Non-goals:
        - Does NOT perform currency conversion (use Bank.convert)
        - Does NOT auto-round -- callers must explicitly call .round()
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", Currency.coerce(self.currency))

    @classmethod
    def of(cls, amount: Number, currency: str | Currency) -> Money:
        """Factory method for creating Money."""
        return cls(amount=to_decimal(amount), currency=Currency.coerce(currency))

    @classmethod
    def zero(cls, currency: str | Currency) -> Money:
        """Create a zero amount in the given currency."""
        return cls(amount=Decimal("0"), currency=Currency.coerce(currency))

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def scale(self, factor: Number) -> Money:
        """
        Multiply by a scalar.

        Any finite factor is allowed, including zero and negatives. The
        product is exact.

        Raises:
            InvalidAmountError: If the product would need rounding or
                overflows.
        """
        product = _apply(_EXACT.multiply, self.amount, to_decimal(factor), "*")
        return Money(amount=product, currency=self.currency)

    def divide(self, divisor: Number) -> Money:
        """
        Divide by a scalar.

        The quotient is rounded to ``MONEY_PRECISION`` significant digits.

        Raises:
            DivisionByZeroError: If divisor is zero.
            InvalidAmountError: If the quotient overflows.
        """
        d = to_decimal(divisor)
        if d == 0:
            raise DivisionByZeroError(str(self.amount), self.currency.code)
        quotient = _apply(_ROUNDED.divide, self.amount, d, "/")
        return Money(amount=quotient, currency=self.currency)

    def round(self, rounding: str = ROUND_HALF_UP) -> Money:
        """Round to the currency's decimal places."""
        exponent = Decimal(1).scaleb(-self.currency.decimal_places)
        rounded = _apply(
            lambda a, e: a.quantize(e, rounding=rounding, context=_ROUNDED),
            self.amount,
            exponent,
            "quantize",
        )
        return Money(amount=rounded, currency=self.currency)

    def _require_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency.code, other.currency.code)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        total = _apply(_EXACT.add, self.amount, other.amount, "+")
        return Money(amount=total, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._require_same_currency(other)
        difference = _apply(_EXACT.subtract, self.amount, other.amount, "-")
        return Money(amount=difference, currency=self.currency)

    def __neg__(self) -> Money:
        return Money(amount=-self.amount, currency=self.currency)

    def __abs__(self) -> Money:
        return Money(amount=abs(self.amount), currency=self.currency)

    def __mul__(self, factor: Number) -> Money:
        if isinstance(factor, (Money, bool)):
            return NotImplemented
        return self.scale(factor)

    def __rmul__(self, factor: Number) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Number) -> Money:
        if isinstance(divisor, (Money, bool)):
            return NotImplemented
        return self.divide(divisor)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.code}"

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, {self.currency!r})"


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """
    Directed exchange rate between two currencies.

    Contract:
        Represents: 1 unit of from_currency = rate units of to_currency.
        Validated on construction: rate must be positive and the two
        currencies must differ.

    Non-goals:
        - Does NOT imply the reverse rate
        - Does NOT handle triangulation or cross rates
    """

    from_currency: Currency
    to_currency: Currency
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_currency", Currency.coerce(self.from_currency))
        object.__setattr__(self, "to_currency", Currency.coerce(self.to_currency))

        try:
            rate = to_decimal(self.rate)
        except InvalidAmountError as e:
            raise InvalidExchangeRateError(str(self.rate), e.reason) from e
        if rate <= 0:
            raise InvalidExchangeRateError(str(rate), "rate must be positive")
        if self.from_currency == self.to_currency:
            raise InvalidExchangeRateError(
                str(rate), f"{self.from_currency} cannot be converted to itself"
            )
        object.__setattr__(self, "rate", rate)

    @classmethod
    def of(
        cls,
        from_currency: str | Currency,
        to_currency: str | Currency,
        rate: Number,
    ) -> ExchangeRate:
        """Factory method for creating ExchangeRate."""
        return cls(from_currency=from_currency, to_currency=to_currency, rate=rate)

    def convert(self, money: Money) -> Money:
        """
        Convert money from from_currency to to_currency.

        Raises:
            CurrencyMismatchError: If money is not in from_currency.
            InvalidAmountError: If the converted amount would need rounding
                or overflows.
        """
        if money.currency != self.from_currency:
            raise CurrencyMismatchError(money.currency.code, self.from_currency.code)
        converted = _apply(_EXACT.multiply, money.amount, self.rate, "*")
        return Money(amount=converted, currency=self.to_currency)

    @property
    def pair(self) -> str:
        """The currency pair in ``FROM->TO`` form."""
        return f"{self.from_currency.code}->{self.to_currency.code}"

    def __str__(self) -> str:
        return f"{self.pair} = {self.rate}"

    def __repr__(self) -> str:
        return (
            f"ExchangeRate({self.from_currency!r}, "
            f"{self.to_currency!r}, {self.rate!r})"
        )

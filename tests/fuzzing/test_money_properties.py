"""
Property-based tests for Money, Bank and Portfolio.

Uses Hypothesis to check the arithmetic laws over generated Decimal
amounts rather than a handful of hand-picked values.
"""

from decimal import Decimal

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from portfolio_kernel.domain.bank import Bank
from portfolio_kernel.domain.portfolio import Portfolio
from portfolio_kernel.domain.values import Money
from portfolio_kernel.exceptions import (
    DivisionByZeroError,
    MissingExchangeRateError,
    MissingExchangeRatesError,
)

amounts = st.decimals(
    min_value=Decimal("-999999999.99"),
    max_value=Decimal("999999999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
factors = st.decimals(
    min_value=Decimal("-1000"),
    max_value=Decimal("1000"),
    places=4,
    allow_nan=False,
    allow_infinity=False,
)
nonzero_factors = factors.filter(lambda d: d != 0)
positive_rates = st.decimals(
    min_value=Decimal("0.0001"),
    max_value=Decimal("10000"),
    places=4,
    allow_nan=False,
    allow_infinity=False,
)
currencies = st.sampled_from(["USD", "EUR", "KRW", "GBP", "JPY", "CHF"])


class TestMoneyLaws:

    @given(amount=amounts, currency=currencies, k=factors)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_scale(self, amount, currency, k):
        m = Money(amount, currency)
        scaled = m.scale(k)
        assert scaled.amount == m.amount * k
        assert scaled.currency == m.currency

    @given(amount=amounts, currency=currencies, k=nonzero_factors)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_divide(self, amount, currency, k):
        m = Money(amount, currency)
        divided = m.divide(k)
        assert divided.amount == m.amount / k
        assert divided.currency == m.currency

    @given(amount=amounts, currency=currencies)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_divide_by_zero_always_fails(self, amount, currency):
        with pytest.raises(DivisionByZeroError):
            Money(amount, currency).divide(0)


class TestBankLaws:

    @given(amount=amounts, currency=currencies, rates=st.lists(
        st.tuples(currencies, currencies, positive_rates), max_size=10,
    ))
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_identity_conversion(self, amount, currency, rates):
        bank = Bank()
        for from_code, to_code, rate in rates:
            if from_code != to_code:
                bank.add_exchange_rate(from_code, to_code, rate)
        m = Money(amount, currency)
        assert bank.convert(m, currency) == m

    @given(amount=amounts, source=currencies, target=currencies)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_missing_rate(self, amount, source, target):
        if source == target:
            return
        try:
            Bank().convert(Money(amount, source), target)
        except MissingExchangeRateError as e:
            assert (e.from_currency, e.to_currency) == (source, target)
            return
        raise AssertionError("conversion without a rate succeeded")

    @given(amount=amounts, rate=positive_rates)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_conversion_multiplies_by_rate(self, amount, rate):
        bank = Bank()
        bank.add_exchange_rate("EUR", "USD", rate)
        assert bank.convert(Money(amount, "EUR"), "USD") == Money(amount * rate, "USD")


class TestPortfolioLaws:

    @given(values=st.lists(amounts, max_size=25), currency=currencies)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_additive(self, values, currency):
        portfolio = Portfolio.of(*(Money(v, currency) for v in values))
        total = portfolio.evaluate(Bank(), currency)
        assert total.amount == sum(values, Decimal("0"))

    @given(values=st.lists(amounts, max_size=25))
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_order_irrelevant(self, values):
        bank = Bank()
        bank.add_exchange_rate("EUR", "USD", "1.2")
        items = [Money(v, "EUR" if i % 2 else "USD") for i, v in enumerate(values)]
        forward = Portfolio.of(*items).evaluate(bank, "USD")
        backward = Portfolio.of(*reversed(items)).evaluate(bank, "USD")
        assert forward == backward

    @given(codes=st.lists(currencies, min_size=1, max_size=15))
    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_failures_listed_in_encounter_order(self, codes):
        portfolio = Portfolio.of(*(Money(1, c) for c in codes))
        expected = [f"{c}->USD" for c in codes if c != "USD"]
        try:
            portfolio.evaluate(Bank(), "USD")
        except MissingExchangeRatesError as e:
            assert list(e.pairs) == expected
            assert str(e) == f"Missing exchange rate(s):[{','.join(expected)}]"
            return
        assert expected == []

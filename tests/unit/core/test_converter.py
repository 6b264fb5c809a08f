"""Tests for base-currency pivot conversion."""

from __future__ import annotations

import pytest

from tokenledger.common.errors import (
    EmptyCurrencyError,
    EmptyRatesError,
    InvalidRateError,
    MoneyOverflowError,
    RateNotFoundError,
)
from tokenledger.core.cost.converter import CurrencyConverter
from tokenledger.core.cost.money import INT64_MAX, Money


@pytest.mark.unit
class TestConverterSetup:
    def test_basic_initialization(self, rates: dict[str, float]) -> None:
        c = CurrencyConverter("USD", rates)
        assert c.base_currency == "USD"
        assert dict(c.rates) == rates

    def test_no_initial_rates(self) -> None:
        c = CurrencyConverter("USD")
        assert dict(c.rates) == {}

    def test_empty_base_currency(self) -> None:
        with pytest.raises(EmptyCurrencyError):
            CurrencyConverter("", {"EUR": 0.9})

    def test_empty_initial_rates_rejected(self) -> None:
        with pytest.raises(EmptyRatesError):
            CurrencyConverter("USD", {})

    def test_rates_snapshot_is_read_only(self, converter: CurrencyConverter) -> None:
        with pytest.raises(TypeError):
            converter.rates["EUR"] = 2.0  # type: ignore[index]

    def test_caller_mapping_is_copied(self) -> None:
        source = {"EUR": 0.8}
        c = CurrencyConverter("USD", source)
        source["EUR"] = 100.0
        assert c.rates["EUR"] == 0.8


@pytest.mark.unit
class TestSetRates:
    def test_replaces_whole_table(self, converter: CurrencyConverter) -> None:
        converter.set_rates({"CHF": 0.9})
        assert dict(converter.rates) == {"CHF": 0.9}
        with pytest.raises(RateNotFoundError):
            converter.convert(Money("USD", 1, 0), "EUR")

    def test_empty_rates(self, converter: CurrencyConverter, rates: dict[str, float]) -> None:
        with pytest.raises(EmptyRatesError):
            converter.set_rates({})
        assert dict(converter.rates) == rates

    @pytest.mark.parametrize("bad_rate", [0, 0.0, -1.5, float("nan"), float("inf"), "abc", None])
    def test_invalid_rate(self, converter: CurrencyConverter, rates: dict[str, float], bad_rate: object) -> None:
        with pytest.raises(InvalidRateError) as exc_info:
            converter.set_rates({"EUR": 0.9, "GBP": bad_rate})  # type: ignore[dict-item]
        assert exc_info.value.details["currency_code"] == "GBP"
        # The active table is left untouched
        assert dict(converter.rates) == rates


@pytest.mark.unit
class TestConvert:
    def test_same_currency_is_identity(self, converter: CurrencyConverter) -> None:
        for code in ("USD", "EUR", "GBP", "JPY", "CAD"):
            amount = Money(code, 100, 500_000_000)
            assert converter.convert(amount, code) is amount

    @pytest.mark.parametrize(
        ("amount", "target", "expected"),
        [
            (Money("USD", 100, 0), "EUR", Money("EUR", 85, 0)),
            (Money("USD", 100, 0), "JPY", Money("JPY", 11000, 0)),
            (Money("GBP", 100, 0), "USD", Money("USD", 200, 0)),
            (Money("GBP", 100, 0), "EUR", Money("EUR", 170, 0)),
            (Money("USD", 3, 0), "EUR", Money("EUR", 2, 550_000_000)),
        ],
    )
    def test_convert(self, converter: CurrencyConverter, amount: Money, target: str, expected: Money) -> None:
        assert converter.convert(amount, target) == expected

    def test_to_base_divides_by_rate(self) -> None:
        # 0.8 EUR buys one USD, so 100 EUR is 125 USD
        c = CurrencyConverter("USD", {"EUR": 0.8, "GBP": 0.5})
        assert c.convert(Money("EUR", 100, 0), "USD") == Money("USD", 125, 0)

    def test_to_base_uses_exact_division(self) -> None:
        c = CurrencyConverter("USD", {"EUR": 0.3})
        result = c.convert(Money("EUR", 10**15, 0), "USD")
        assert result.currency_code == "USD"
        assert abs(result.total_nanos - 3_333_333_333_333_333_456_691_447) <= 1

    def test_pivots_between_non_base_currencies(self) -> None:
        c = CurrencyConverter("USD", {"EUR": 0.8, "GBP": 0.5})
        assert c.convert(Money("EUR", 100, 0), "GBP") == Money("GBP", 62, 500_000_000)

    def test_base_needs_no_rate_entry(self) -> None:
        c = CurrencyConverter("USD", {"EUR": 0.8})
        assert c.rate_for("USD") == 1.0
        assert c.convert(Money("EUR", 100, 0), "USD") == Money("USD", 125, 0)
        assert c.convert(Money("USD", 100, 0), "EUR") == Money("EUR", 80, 0)

    @pytest.mark.parametrize(
        "amount",
        [
            Money("USD", 100, 0),
            Money("USD", 12, 345_678_901),
            Money("USD", 0, 30_000),
            Money("USD", 1_234_567, 891_234_567),
            Money("USD", -42, -999_999_999),
        ],
    )
    @pytest.mark.parametrize("target", ["EUR", "GBP", "JPY"])
    def test_round_trip_through_base(self, converter: CurrencyConverter, amount: Money, target: str) -> None:
        back = converter.convert(converter.convert(amount, target), "USD")
        assert back.currency_code == "USD"
        assert abs(back.total_nanos - amount.total_nanos) <= 1

    def test_source_currency_not_found(self, converter: CurrencyConverter) -> None:
        with pytest.raises(RateNotFoundError) as exc_info:
            converter.convert(Money("CAD", 100, 0), "USD")
        assert exc_info.value.details["currency_code"] == "CAD"

    def test_target_currency_not_found(self, converter: CurrencyConverter) -> None:
        with pytest.raises(RateNotFoundError) as exc_info:
            converter.convert(Money("USD", 100, 0), "CAD")
        assert exc_info.value.details["currency_code"] == "CAD"

    def test_overflow_is_reported(self, converter: CurrencyConverter) -> None:
        with pytest.raises(MoneyOverflowError):
            converter.convert(Money("USD", INT64_MAX, 0), "JPY")

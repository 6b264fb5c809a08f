"""
Currency conversion through a base currency.

Rates are stored once per currency, relative to the base ("how many units
of X buy one unit of base"), so N currencies need N rates rather than N²
pairs. Every conversion between two non-base currencies pivots through
the base: source -> base -> target.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Mapping
from types import MappingProxyType

import structlog

from tokenledger.common.errors import (
    EmptyCurrencyError,
    EmptyRatesError,
    InvalidRateError,
    RateNotFoundError,
)
from tokenledger.core.cost.money import Money

logger = structlog.stdlib.get_logger()


def validate_rates(rates: Mapping[str, float]) -> dict[str, float]:
    """
    Check a rate table and return a private copy of it.

    Raises:
        EmptyRatesError: If the table has no entries
        InvalidRateError: If any rate is not a finite number greater than zero
    """
    if not rates:
        raise EmptyRatesError("conversion rates cannot be empty")

    validated: dict[str, float] = {}
    for currency, raw in rates.items():
        try:
            rate = float(raw)
        except (TypeError, ValueError) as e:
            raise InvalidRateError(
                f"conversion rate {currency} is not a number: {raw!r}",
                details={"currency_code": currency},
            ) from e
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidRateError(
                f"conversion rate {currency} must be greater than 0: {rate}",
                details={"currency_code": currency, "rate": rate},
            )
        validated[currency] = rate
    return validated


class CurrencyConverter:
    """Converts Money between currencies using base-relative rates."""

    def __init__(self, base_currency: str, rates: Mapping[str, float] | None = None) -> None:
        if not base_currency or not base_currency.strip():
            raise EmptyCurrencyError("base currency cannot be empty")
        self._base_currency = base_currency
        self._lock = threading.Lock()
        self._rates: Mapping[str, float] = MappingProxyType({})
        if rates is not None:
            self.set_rates(rates)

    @property
    def base_currency(self) -> str:
        return self._base_currency

    @property
    def rates(self) -> Mapping[str, float]:
        """Read-only snapshot of the active rate table."""
        return self._rates

    def set_rates(self, rates: Mapping[str, float]) -> None:
        """Replace the whole rate table; the active table is untouched on error."""
        validated = validate_rates(rates)
        with self._lock:
            self._rates = MappingProxyType(validated)
        logger.info(
            "converter.rates_replaced",
            base_currency=self._base_currency,
            currencies=sorted(validated),
        )

    def rate_for(self, currency_code: str, rates: Mapping[str, float] | None = None) -> float:
        """Rate of ``currency_code`` against the base; the base itself is 1."""
        table = self._rates if rates is None else rates
        rate = table.get(currency_code)
        if rate is not None:
            return rate
        if currency_code == self._base_currency:
            return 1.0
        raise RateNotFoundError(
            f"conversion rate for currency {currency_code} not found",
            details={"currency_code": currency_code, "base_currency": self._base_currency},
        )

    def convert(self, amount: Money, target_currency: str) -> Money:
        """
        Convert ``amount`` into ``target_currency``.

        Raises:
            RateNotFoundError: If the source or target currency has no rate
            MoneyOverflowError: If the converted amount cannot be represented
        """
        if amount.currency_code == target_currency:
            return amount

        # One snapshot per conversion so a concurrent set_rates never mixes tables.
        rates = self._rates

        base_amount = amount
        if amount.currency_code != self._base_currency:
            base_amount = self._to_base(amount, rates)

        if base_amount.currency_code == target_currency:
            return base_amount

        target_rate = self.rate_for(target_currency, rates)
        return base_amount.times_float(target_rate).with_currency(target_currency)

    def _to_base(self, amount: Money, rates: Mapping[str, float]) -> Money:
        rate = self.rate_for(amount.currency_code, rates)
        return amount.divide_float(rate).with_currency(self._base_currency)

"""
Fixed-point decimal money.

A value is a whole number of ``units`` plus ``nanos`` (1e-9 of a unit),
tagged with an ISO 4217 currency code. Arithmetic is carried out on a
single integer count of nanos and renormalised into units/nanos
afterwards, so intermediate rounding never accumulates across repeated
operations.

Rules:
  - ``|nanos| < 1_000_000_000``
  - ``units`` fits a signed 64-bit integer
  - ``units`` and ``nanos`` never carry opposite signs
  - rounding is to the nearest nano, ties away from zero
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from tokenledger.common.errors import (
    CurrencyMismatchError,
    EmptyCurrencyError,
    InvalidRangeError,
    MoneyOverflowError,
    SignMismatchError,
)

CURRENCY_USD = "USD"
CURRENCY_EUR = "EUR"
CURRENCY_GBP = "GBP"
CURRENCY_JPY = "JPY"

NANOS_PER_UNIT = 1_000_000_000
MAX_NANOS = NANOS_PER_UNIT - 1

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

# Exclusive bounds of a scaled (nano) value whose units still fit in int64.
_MAX_SCALED = Decimal((INT64_MAX + 1) * NANOS_PER_UNIT)
_MIN_SCALED = Decimal((INT64_MIN - 1) * NANOS_PER_UNIT)

# Wide enough for int64 units at nano resolution times a float's exact value.
_CONTEXT = Context(prec=80)


def _split(total_nanos: int) -> tuple[int, int]:
    """Split a nano count into sign-consistent (units, nanos)."""
    sign = -1 if total_nanos < 0 else 1
    units, nanos = divmod(abs(total_nanos), NANOS_PER_UNIT)
    return sign * units, sign * nanos


def _round_half_away(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP, context=_CONTEXT))


def _require_int(value: Any, name: str) -> None:
    # bool is an int subclass but never a valid amount.
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidRangeError(
            f"{name} must be an integer, got {type(value).__name__}",
            details={name: repr(value)},
        )


def _require_finite(value: float, operation: str) -> None:
    if not math.isfinite(value):
        raise InvalidRangeError(
            f"{operation} requires a finite number, got {value!r}",
            details={"operation": operation},
        )


@dataclass(frozen=True)
class Money:
    """An immutable monetary amount with nano (1e-9) precision."""

    currency_code: str
    units: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        _require_int(self.units, "units")
        _require_int(self.nanos, "nanos")
        if not -MAX_NANOS <= self.nanos <= MAX_NANOS:
            raise InvalidRangeError(
                f"nanos must be between {-MAX_NANOS} and {MAX_NANOS}: {self.nanos}",
                details={"nanos": self.nanos},
            )
        if not INT64_MIN <= self.units <= INT64_MAX:
            raise InvalidRangeError(
                f"units must fit a signed 64-bit integer: {self.units}",
                details={"units": self.units},
            )
        if (self.units < 0 < self.nanos) or (self.nanos < 0 < self.units):
            raise SignMismatchError(
                f"units and nanos must have the same sign: units[{self.units}], nanos[{self.nanos}]",
                details={"units": self.units, "nanos": self.nanos},
            )
        if not self.currency_code or not self.currency_code.strip():
            raise EmptyCurrencyError("currency code cannot be empty")

    # Construction helpers

    @classmethod
    def from_float(cls, currency_code: str, amount: float) -> Money:
        """
        Build a value from a float amount, e.g. ``Money.from_float("USD", 0.03 / 1000)``.

        Convenient for hand-written catalogs; the float is rounded to the
        nearest nano, ties away from zero.
        """
        _require_finite(amount, "from_float")
        scaled = _CONTEXT.multiply(Decimal(amount), Decimal(NANOS_PER_UNIT))
        return cls._from_scaled(currency_code, scaled, "from_float")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Money:
        return cls(
            currency_code=data["currency_code"],
            units=int(data.get("units", 0)),
            nanos=int(data.get("nanos", 0)),
        )

    @classmethod
    def _from_total_nanos(cls, currency_code: str, total_nanos: int, operation: str) -> Money:
        units, nanos = _split(total_nanos)
        if not INT64_MIN <= units <= INT64_MAX:
            raise MoneyOverflowError(
                f"{operation} overflows the 64-bit units range",
                details={"currency_code": currency_code, "operation": operation},
            )
        return cls(currency_code, units, nanos)

    @classmethod
    def _from_scaled(cls, currency_code: str, scaled: Decimal, operation: str) -> Money:
        # Range is checked before rounding so a huge product never reaches int().
        if not _MIN_SCALED < scaled < _MAX_SCALED:
            raise MoneyOverflowError(
                f"{operation} overflows the 64-bit units range",
                details={"currency_code": currency_code, "operation": operation},
            )
        return cls._from_total_nanos(currency_code, _round_half_away(scaled), operation)

    # Arithmetic

    @property
    def total_nanos(self) -> int:
        """The whole amount as a single integer count of nanos."""
        return self.units * NANOS_PER_UNIT + self.nanos

    def add(self, other: Money) -> Money:
        if self.currency_code != other.currency_code:
            raise CurrencyMismatchError(
                f"currency codes do not match: {self.currency_code} != {other.currency_code}",
                details={"currency_code": self.currency_code, "other_currency_code": other.currency_code},
            )
        return self._from_total_nanos(self.currency_code, self.total_nanos + other.total_nanos, "add")

    def times(self, factor: int) -> Money:
        """Multiply by a whole number; use ``times_float`` for real-valued factors."""
        _require_int(factor, "factor")
        if factor == 0:
            return Money(self.currency_code)
        return self._from_total_nanos(self.currency_code, self.total_nanos * factor, "times")

    def times_float(self, rate: float) -> Money:
        """Multiply by a real-valued rate, rounding to the nearest nano."""
        _require_finite(rate, "times_float")
        if rate == 0:
            return Money(self.currency_code)
        scaled = _CONTEXT.multiply(Decimal(self.total_nanos), Decimal(rate))
        return self._from_scaled(self.currency_code, scaled, "times_float")

    def divide_float(self, rate: float) -> Money:
        """Divide by a non-zero real-valued rate, rounding the exact quotient to the nearest nano."""
        _require_finite(rate, "divide_float")
        if rate == 0:
            raise InvalidRangeError("divide_float requires a non-zero rate", details={"operation": "divide_float"})
        scaled = _CONTEXT.divide(Decimal(self.total_nanos), Decimal(rate))
        return self._from_scaled(self.currency_code, scaled, "divide_float")

    def with_currency(self, currency_code: str) -> Money:
        """Same amount, tagged with another currency code."""
        return Money(currency_code, self.units, self.nanos)

    # Inspection / output

    def is_zero(self) -> bool:
        return self.units == 0 and self.nanos == 0

    def is_negative(self) -> bool:
        return self.units < 0 or self.nanos < 0

    def to_float(self) -> float:
        """Lossy conversion for display and comparison only."""
        sign = -1.0 if self.is_negative() else 1.0
        return sign * (abs(self.units) + abs(self.nanos) / NANOS_PER_UNIT)

    def to_rounded_int(self) -> int:
        """Round to the nearest whole unit, ties away from zero."""
        total = self.total_nanos
        rounded = (abs(total) + NANOS_PER_UNIT // 2) // NANOS_PER_UNIT
        rounded = -rounded if total < 0 else rounded
        if not INT64_MIN <= rounded <= INT64_MAX:
            raise MoneyOverflowError(
                "to_rounded_int overflows the 64-bit range",
                details={"currency_code": self.currency_code, "operation": "to_rounded_int"},
            )
        return rounded

    def to_string(self) -> str:
        sign = "-" if self.is_negative() else ""
        return f"{self.currency_code} {sign}{abs(self.units)}.{abs(self.nanos):09d}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "units": self.units,
            "nanos": self.nanos,
            "currency_code": self.currency_code,
        }

    def __str__(self) -> str:
        return self.to_string()

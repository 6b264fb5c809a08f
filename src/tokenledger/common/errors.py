"""
Unified error handling.

Every failure raised by tokenledger derives from ``TokenLedgerError`` and
carries a machine-readable ``error_type`` plus a ``details`` dict with the
offending values (currency code, model string, ...), so billing layers can
act on a failure without parsing messages.
"""

from __future__ import annotations

from typing import Any


class TokenLedgerError(Exception):
    """Base exception for all tokenledger errors."""

    error_type: str = "internal_error"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "message": self.message,
                "type": self.error_type,
                **self.details,
            }
        }


# Money

class MoneyError(TokenLedgerError):
    error_type = "money_error"


class InvalidRangeError(MoneyError):
    error_type = "invalid_range"


class SignMismatchError(MoneyError):
    error_type = "sign_mismatch"


class EmptyCurrencyError(MoneyError):
    error_type = "empty_currency"


class CurrencyMismatchError(MoneyError):
    error_type = "currency_mismatch"


class MoneyOverflowError(MoneyError):
    error_type = "overflow"


# Currency conversion

class ConversionError(TokenLedgerError):
    error_type = "conversion_error"


class RateNotFoundError(ConversionError):
    error_type = "rate_not_found"


class InvalidRateError(ConversionError):
    error_type = "invalid_rate"


class EmptyRatesError(ConversionError):
    error_type = "empty_rates"


# Catalog

class ModelNotFoundError(TokenLedgerError):
    error_type = "model_not_found"


class CatalogError(TokenLedgerError):
    error_type = "invalid_catalog"


# Tokenizer

class TokenizerNotFoundError(TokenLedgerError):
    error_type = "tokenizer_not_found"


class TokenizerError(TokenLedgerError):
    error_type = "tokenizer_error"

from tokenledger.common.errors import (
    CatalogError,
    ConversionError,
    CurrencyMismatchError,
    EmptyCurrencyError,
    EmptyRatesError,
    InvalidRangeError,
    InvalidRateError,
    ModelNotFoundError,
    MoneyError,
    MoneyOverflowError,
    RateNotFoundError,
    SignMismatchError,
    TokenizerError,
    TokenizerNotFoundError,
    TokenLedgerError,
)
from tokenledger.common.tokens import TiktokenCounter, TokenCounter
from tokenledger.core.cost import (
    DEFAULT_CATALOG,
    Accountant,
    Cost,
    CurrencyConverter,
    ModelPrice,
    ModelResolver,
    Money,
    build_catalog,
    load_catalog,
)
from tokenledger.core.cost.money import CURRENCY_EUR, CURRENCY_GBP, CURRENCY_JPY, CURRENCY_USD

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Accountant",
    "Cost",
    "CurrencyConverter",
    "ModelPrice",
    "ModelResolver",
    "Money",
    "DEFAULT_CATALOG",
    "build_catalog",
    "load_catalog",
    "TokenCounter",
    "TiktokenCounter",
    "CURRENCY_USD",
    "CURRENCY_EUR",
    "CURRENCY_GBP",
    "CURRENCY_JPY",
    "TokenLedgerError",
    "MoneyError",
    "InvalidRangeError",
    "SignMismatchError",
    "EmptyCurrencyError",
    "CurrencyMismatchError",
    "MoneyOverflowError",
    "ConversionError",
    "RateNotFoundError",
    "InvalidRateError",
    "EmptyRatesError",
    "ModelNotFoundError",
    "CatalogError",
    "TokenizerNotFoundError",
    "TokenizerError",
]

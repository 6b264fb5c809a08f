"""
Token cost accounting.

The ``Accountant`` ties the pieces together:

    resolver.find(provider, model)      -> per-token cost (catalog currency)
    cost.times(tokens)                  -> native cost
    converter.convert(native, currency) -> cost in the caller's currency

Both amounts are returned so callers can display either one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import NamedTuple

import structlog

from tokenledger.common.errors import TokenizerError, TokenizerNotFoundError
from tokenledger.common.tokens import TiktokenCounter, TokenCounter
from tokenledger.config import Settings, get_settings
from tokenledger.core.cost.catalog import ModelPrice, ModelResolver
from tokenledger.core.cost.converter import CurrencyConverter
from tokenledger.core.cost.money import Money
from tokenledger.core.cost.pricing import build_catalog

logger = structlog.stdlib.get_logger()


class Cost(NamedTuple):
    """A cost in the catalog's currency and in the requested currency."""

    native: Money
    converted: Money


class Accountant:
    """Prices model input and output tokens in any configured currency."""

    def __init__(
        self,
        models: Iterable[ModelPrice],
        converter: CurrencyConverter,
        tokenizer: TokenCounter | None = None,
    ) -> None:
        self._resolver = ModelResolver(models)
        self._converter = converter
        self._tokenizer = tokenizer if tokenizer is not None else TiktokenCounter()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Accountant:
        """Build an accountant from configuration (cached settings by default)."""
        settings = settings or get_settings()
        converter = CurrencyConverter(settings.currency.base, settings.currency.rates)
        models = build_catalog(settings.catalog.path, settings.catalog.include_defaults)
        tokenizer = TiktokenCounter(settings.tokenizer.encodings)
        return cls(models, converter, tokenizer)

    @property
    def converter(self) -> CurrencyConverter:
        return self._converter

    @property
    def tokenizer(self) -> TokenCounter:
        return self._tokenizer

    def models(self) -> list[ModelPrice]:
        """The catalog currently in use, in resolution order."""
        return list(self._resolver.models)

    def replace_models(self, models: Iterable[ModelPrice]) -> None:
        self._resolver.replace(models)

    def replace_rates(self, rates: Mapping[str, float]) -> None:
        self._converter.set_rates(rates)

    def token_count(self, provider: str, model: str, text: str) -> int:
        """
        Count the tokens ``model`` would see for ``text``.

        Raises:
            TokenizerNotFoundError: If the tokenizer has no encoding for the model
            TokenizerError: For any other tokenizer failure
        """
        try:
            return self._tokenizer.count(model, text)
        except TokenizerNotFoundError:
            raise
        except Exception as e:
            raise TokenizerError(
                f"failed to count tokens for model {model}: {e}",
                details={"provider": provider, "model": model},
            ) from e

    def cost_for_model_input(self, provider: str, model: str, target_currency: str, tokens: int) -> Cost:
        """
        Cost of ``tokens`` prompt tokens.

        Raises:
            ModelNotFoundError: If no catalog entry prices the model
            RateNotFoundError: If the currency pair cannot be converted
            MoneyOverflowError: If the cost cannot be represented
        """
        entry = self._resolver.find(provider, model)
        return self._calculate(entry, entry.cost_input, target_currency, tokens, "input")

    def cost_for_model_output(self, provider: str, model: str, target_currency: str, tokens: int) -> Cost:
        """Cost of ``tokens`` completion tokens; raises like ``cost_for_model_input``."""
        entry = self._resolver.find(provider, model)
        return self._calculate(entry, entry.cost_output, target_currency, tokens, "output")

    def _calculate(
        self,
        entry: ModelPrice,
        cost_per_token: Money,
        target_currency: str,
        tokens: int,
        direction: str,
    ) -> Cost:
        native = cost_per_token.times(tokens)
        converted = self._converter.convert(native, target_currency)

        logger.debug(
            "accountant.cost_computed",
            provider=entry.provider,
            model=entry.model,
            direction=direction,
            tokens=tokens,
            native=str(native),
            converted=str(converted),
        )
        return Cost(native=native, converted=converted)

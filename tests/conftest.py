"""
Shared test fixtures.

Rates and catalog entries are chosen so the expected amounts are exact:
0.8 and 0.5 have exact binary inverses, 0.85 rounds cleanly at nano
resolution for the amounts used here.
"""

from __future__ import annotations

import pytest

from tests.factories import FakeCounter, create_test_model, usd
from tokenledger.config import get_settings
from tokenledger.core.cost.accountant import Accountant
from tokenledger.core.cost.catalog import ModelPrice
from tokenledger.core.cost.converter import CurrencyConverter


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rates() -> dict[str, float]:
    return {"USD": 1.0, "EUR": 0.85, "GBP": 0.5, "JPY": 110.0}


@pytest.fixture
def converter(rates: dict[str, float]) -> CurrencyConverter:
    return CurrencyConverter("USD", rates)


@pytest.fixture
def catalog() -> list[ModelPrice]:
    return [
        create_test_model("openai", "gpt-4"),
        create_test_model(
            "anthropic",
            "claude-3",
            cost_input=usd(nanos=8_000_000),
            cost_output=usd(nanos=24_000_000),
        ),
        create_test_model(
            "anthropic",
            "claude-2",
            cost_input=usd(nanos=6_000_000),
            cost_output=usd(nanos=18_000_000),
        ),
    ]


@pytest.fixture
def counter() -> FakeCounter:
    return FakeCounter()


@pytest.fixture
def accountant(catalog: list[ModelPrice], converter: CurrencyConverter, counter: FakeCounter) -> Accountant:
    return Accountant(catalog, converter, tokenizer=counter)

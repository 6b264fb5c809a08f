"""Built-in pricing catalog and catalog file loader."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from tokenledger.common.errors import CatalogError
from tokenledger.core.cost.catalog import ModelPrice
from tokenledger.core.cost.money import CURRENCY_USD, Money
from tokenledger.schemas.catalog import CatalogFile

logger = structlog.stdlib.get_logger()


def _usd_per_1k(input_cost: float, output_cost: float) -> tuple[Money, Money]:
    """Per-token costs from the per-1k-token prices providers publish."""
    return (
        Money.from_float(CURRENCY_USD, input_cost / 1000),
        Money.from_float(CURRENCY_USD, output_cost / 1000),
    )


def _openai(model: str, input_cost: float, output_cost: float, *releases: str) -> ModelPrice:
    cost_input, cost_output = _usd_per_1k(input_cost, output_cost)
    return ModelPrice(
        provider="openai",
        model=model,
        releases=releases,
        cost_input=cost_input,
        cost_output=cost_output,
    )


# OpenAI list prices per 1k tokens. Order matters: the first match wins,
# so specific entries come before the wildcard entries that would shadow them.
DEFAULT_CATALOG: tuple[ModelPrice, ...] = (
    _openai("gpt-4o-mini", 0.00015, 0.00060, "2024-07-18", "*"),
    _openai("gpt-4o", 0.00500, 0.01500, "2024-05-13", "*"),
    _openai("gpt-4-turbo", 0.01000, 0.03000, "2024-04-09", "*"),
    _openai("gpt-4", 0.03000, 0.06000),
    _openai("gpt-4-32k", 0.06000, 0.12000),
    _openai("gpt-4", 0.01000, 0.03000, "0125", "0125-preview", "1106-preview", "vision-preview"),
    _openai("gpt-3.5-turbo", 0.00050, 0.00150),
    _openai("gpt-3.5-turbo", 0.00050, 0.00150, "0125"),
    _openai("gpt-3.5-turbo-instruct", 0.00150, 0.00200),
    _openai("gpt-3.5-turbo", 0.00100, 0.00200, "1106"),
    _openai("gpt-3.5-turbo", 0.00150, 0.00200, "0613", "0301"),
    _openai("gpt-3.5-turbo", 0.00300, 0.00400, "16k-0613"),
)


def load_catalog(path: str | Path) -> list[ModelPrice]:
    """
    Load an ordered catalog from a YAML or JSON file.

    The file holds a top-level ``models`` list; entry order is kept.

    Raises:
        CatalogError: If the file cannot be read or does not match the schema
        MoneyError: If a cost is not a valid money value
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise CatalogError(f"cannot read catalog file {path}: {e}", details={"path": str(path)}) from e
    except yaml.YAMLError as e:
        raise CatalogError(f"cannot parse catalog file {path}: {e}", details={"path": str(path)}) from e

    try:
        catalog = CatalogFile.model_validate(data)
    except ValidationError as e:
        raise CatalogError(
            f"invalid catalog file {path}: {e}",
            details={"path": str(path), "error_count": e.error_count()},
        ) from e

    models = [spec.to_model_price() for spec in catalog.models]
    logger.info("catalog.loaded", path=str(path), entries=len(models))
    return models


def build_catalog(path: str | Path | None = None, include_defaults: bool = True) -> list[ModelPrice]:
    """
    Assemble the catalog an accountant resolves against.

    Entries from ``path`` come first so they take priority over the
    built-in entries they overlap with.
    """
    models: list[ModelPrice] = []
    if path is not None:
        models.extend(load_catalog(path))
    if include_defaults:
        models.extend(DEFAULT_CATALOG)
    return models

"""
Model pricing catalog and resolution.

A catalog is an ordered list of ``ModelPrice`` entries. Resolution scans it
in order and returns the first entry that matches; catalog order is
therefore the priority rule. Authors must list specific entries (an exact
``gpt-4-32k``) before general wildcard ones (``gpt-4`` with ``*``),
otherwise the general entry shadows the specific one.

Release rules:
  - no releases      -> the model string must equal the base model exactly
  - "*" in releases  -> the base model itself or base model + "-" + anything
  - other releases   -> the model string must equal base model + "-" + release
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from tokenledger.common.errors import ModelNotFoundError
from tokenledger.core.cost.money import Money

logger = structlog.stdlib.get_logger()

WILDCARD_RELEASE = "*"
RELEASE_SEPARATOR = "-"


@dataclass(frozen=True)
class ModelPrice:
    """Per-token pricing for one model (and optionally a set of its releases)."""

    provider: str
    model: str
    cost_input: Money
    cost_output: Money
    releases: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable of releases but store an immutable tuple.
        object.__setattr__(self, "releases", tuple(self.releases))

    def matches(self, model: str) -> bool:
        """Check whether a concrete model string is priced by this entry."""
        if not self.releases:
            return model == self.model

        if not model.startswith(self.model):
            return False

        for release in self.releases:
            if release == WILDCARD_RELEASE:
                suffix = model[len(self.model):]
                if not suffix or suffix.startswith(RELEASE_SEPARATOR):
                    return True
            elif f"{self.model}{RELEASE_SEPARATOR}{release}" == model:
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "releases": list(self.releases),
            "cost_input": self.cost_input.to_dict(),
            "cost_output": self.cost_output.to_dict(),
        }


class ModelResolver:
    """Finds the catalog entry pricing a (provider, model) pair."""

    def __init__(self, models: Iterable[ModelPrice] = ()) -> None:
        self._lock = threading.Lock()
        self._models: tuple[ModelPrice, ...] = tuple(models)

    @property
    def models(self) -> tuple[ModelPrice, ...]:
        return self._models

    def __len__(self) -> int:
        return len(self._models)

    def replace(self, models: Iterable[ModelPrice]) -> None:
        """Swap in a whole new catalog."""
        snapshot = tuple(models)
        with self._lock:
            self._models = snapshot
        logger.info("resolver.catalog_replaced", entries=len(snapshot))

    def find(self, provider: str, model: str) -> ModelPrice:
        """
        Return the first entry matching ``model`` for ``provider``.

        An empty ``provider`` matches entries of every provider.

        Raises:
            ModelNotFoundError: If no entry matches
        """
        for entry in self._models:
            if provider and entry.provider != provider:
                continue
            if entry.matches(model):
                return entry

        logger.debug("resolver.model_not_found", provider=provider, model=model)
        raise ModelNotFoundError(
            f"model not supported: {provider}/{model}" if provider else f"model not supported: {model}",
            details={"provider": provider, "model": model},
        )

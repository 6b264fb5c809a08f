"""Token counting utilities."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Protocol, runtime_checkable

import tiktoken

from tokenledger.common.errors import TokenizerNotFoundError


@runtime_checkable
class TokenCounter(Protocol):
    """Anything able to count the tokens a model would see for a text."""

    def count(self, model: str, text: str) -> int:
        ...


@lru_cache(maxsize=16)
def _get_encoding(name: str) -> tiktoken.Encoding:
    """Get a tiktoken encoding by name, loaded once per process."""
    return tiktoken.get_encoding(name)


class TiktokenCounter:
    """
    Count tokens with tiktoken.

    ``encodings`` maps model names tiktoken does not know (other providers,
    private fine-tunes) to an encoding name. The mapping belongs to this
    instance only, so two counters can disagree without affecting each other.
    """

    def __init__(self, encodings: Mapping[str, str] | None = None) -> None:
        self._encodings = dict(encodings or {})

    def encoding_name(self, model: str) -> str:
        override = self._encodings.get(model)
        if override is not None:
            return override
        try:
            return tiktoken.encoding_name_for_model(model)
        except KeyError as e:
            raise TokenizerNotFoundError(
                f"no encoding for model {model}",
                details={"model": model},
            ) from e

    def count(self, model: str, text: str) -> int:
        name = self.encoding_name(model)
        if not text:
            return 0
        enc = _get_encoding(name)
        # Special-token markers in user text are counted as plain text.
        return len(enc.encode(text, disallowed_special=()))

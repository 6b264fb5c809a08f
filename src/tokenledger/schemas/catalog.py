"""Catalog file schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tokenledger.core.cost.catalog import ModelPrice
from tokenledger.core.cost.money import Money


class MoneySpec(BaseModel):
    """
    A money value as written in a catalog file.

    Either the exact ``units``/``nanos`` pair or a float ``amount``
    shorthand (rounded to the nearest nano).
    """

    model_config = ConfigDict(extra="forbid")

    currency_code: str
    units: int | None = None
    nanos: int | None = None
    amount: float | None = None

    @model_validator(mode="after")
    def _single_form(self) -> MoneySpec:
        exact = self.units is not None or self.nanos is not None
        if self.amount is not None and exact:
            raise ValueError("give either 'amount' or 'units'/'nanos', not both")
        if self.amount is None and not exact:
            raise ValueError("one of 'amount' or 'units'/'nanos' is required")
        return self

    def to_money(self) -> Money:
        if self.amount is not None:
            return Money.from_float(self.currency_code, self.amount)
        return Money(self.currency_code, self.units or 0, self.nanos or 0)


class ModelSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    provider: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    releases: list[str] = Field(default_factory=list)
    cost_input: MoneySpec
    cost_output: MoneySpec

    def to_model_price(self) -> ModelPrice:
        return ModelPrice(
            provider=self.provider,
            model=self.model,
            releases=tuple(self.releases),
            cost_input=self.cost_input.to_money(),
            cost_output=self.cost_output.to_money(),
        )


class CatalogFile(BaseModel):
    models: list[ModelSpec] = Field(default_factory=list)

from tokenledger.core.cost.accountant import Accountant, Cost
from tokenledger.core.cost.catalog import ModelPrice, ModelResolver
from tokenledger.core.cost.converter import CurrencyConverter
from tokenledger.core.cost.money import Money
from tokenledger.core.cost.pricing import DEFAULT_CATALOG, build_catalog, load_catalog

__all__ = [
    "Accountant",
    "Cost",
    "CurrencyConverter",
    "DEFAULT_CATALOG",
    "ModelPrice",
    "ModelResolver",
    "Money",
    "build_catalog",
    "load_catalog",
]

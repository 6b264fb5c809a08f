from tokenledger.schemas.catalog import CatalogFile, ModelSpec, MoneySpec

__all__ = [
    "CatalogFile",
    "ModelSpec",
    "MoneySpec",
]

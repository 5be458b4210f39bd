"""Concrete strategy implementations."""

from contract_engine.strategies.clause_sources import (
    CatalogueProvider,
    HttpClauseSource,
    StaticClauseSource,
)
from contract_engine.strategies.engine import (
    ContractResolver,
    DocxContractRenderer,
    PreviewRenderer,
)
from contract_engine.strategies.image_fetchers import (
    HttpImageFetcher,
)

__all__ = [
    "CatalogueProvider",
    "HttpClauseSource",
    "StaticClauseSource",
    "ContractResolver",
    "DocxContractRenderer",
    "PreviewRenderer",
    "HttpImageFetcher",
]

"""Concrete clause catalogue sources."""

from contract_engine.strategies.clause_sources.cache import CatalogueProvider
from contract_engine.strategies.clause_sources.http import HttpClauseSource
from contract_engine.strategies.clause_sources.static import StaticClauseSource

__all__ = [
    "CatalogueProvider",
    "HttpClauseSource",
    "StaticClauseSource",
]

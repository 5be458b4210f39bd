"""FastAPI routers and dependencies."""

from contract_engine.api.clauses import router as clauses_router
from contract_engine.api.contracts import router as contracts_router
from contract_engine.api.deps import get_catalogue, get_component_factory

__all__ = [
    "get_catalogue",
    "get_component_factory",
    "clauses_router",
    "contracts_router",
]

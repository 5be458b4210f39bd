"""Clause catalogue API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from contract_engine.api.deps import get_component_factory
from contract_engine.api.schemas import ClausesResponse
from contract_engine.core.factory import ComponentFactory
from contract_engine.interfaces.resolution import CatalogueUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clauses", tags=["clauses"])


@router.get("", response_model=ClausesResponse)
async def list_clauses(
    refresh: bool = Query(default=False, description="Bypass the catalogue cache"),
    factory: ComponentFactory = Depends(get_component_factory),
) -> ClausesResponse:
    """Return the clause catalogue rows.

    Raises:
        HTTPException: 503 if the catalogue cannot be loaded.
    """
    try:
        catalogue = await factory.get_catalogue_provider().get(force_refresh=refresh)
    except (CatalogueUnavailableError, ValueError) as e:
        logger.error(f"Failed to load clause catalogue: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Clause catalogue unavailable",
        ) from e

    rows = catalogue.to_rows()
    return ClausesResponse(values=rows, count=len(rows))

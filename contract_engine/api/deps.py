"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The component factory
- The clause catalogue for the current request
- Generation secret checks
"""

import hmac
import logging

from fastapi import Depends, Header, HTTPException, Request, status

from contract_engine.core.factory import ComponentFactory
from contract_engine.interfaces.resolution import CatalogueUnavailableError
from contract_engine.strategies.engine.catalogue import ClauseCatalogue

logger = logging.getLogger(__name__)


def get_component_factory(request: Request) -> ComponentFactory:
    """Dependency returning the application's component factory."""
    return request.app.state.factory


async def get_catalogue(
    factory: ComponentFactory = Depends(get_component_factory),
) -> ClauseCatalogue:
    """Dependency for the clause catalogue.

    Raises:
        HTTPException: 503 if the catalogue cannot be loaded.
    """
    try:
        return await factory.get_catalogue_provider().get()
    except CatalogueUnavailableError as e:
        logger.error(f"Clause catalogue unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Clause catalogue unavailable",
        ) from e
    except ValueError as e:
        logger.error(f"Clause source misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e


def check_generation_secret(
    factory: ComponentFactory,
    provided: str | None,
) -> None:
    """Validate the shared generation secret when one is configured.

    Raises:
        HTTPException: 401 if the secret is missing or wrong.
    """
    expected = factory.settings.generation_secret
    if not expected:
        return
    if not provided or not hmac.compare_digest(provided, expected):
        logger.warning("Rejected generation request with invalid secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def get_header_secret(
    x_generation_secret: str | None = Header(
        default=None, description="Shared secret for contract generation"
    ),
) -> str | None:
    """Dependency extracting the generation secret header."""
    return x_generation_secret

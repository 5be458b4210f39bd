"""HTTP clause catalogue source.

Loads clause rows from the clauses endpoint, which serves
``{"values": [[placeholderName, triggerValue, clauseText], ...]}``.
"""

import logging
from typing import Any

import httpx

from contract_engine.interfaces.clause_source import BaseClauseSource
from contract_engine.interfaces.resolution import CatalogueUnavailableError

logger = logging.getLogger(__name__)


class HttpClauseSource(BaseClauseSource):
    """Fetches clause rows over HTTP with httpx."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            url: Clauses endpoint URL.
            timeout: Request timeout in seconds.
            client: Optional shared client (tests inject a mock transport).
        """
        if not url:
            raise ValueError("A clauses URL is required for HttpClauseSource")
        self._url = url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def fetch_rows(self) -> list[list[Any]]:
        """Fetch clause rows from the endpoint.

        Raises:
            CatalogueUnavailableError: On transport errors, non-2xx responses
                or an unexpected payload.
        """
        logger.info(f"Fetching clauses from {self._url}")
        try:
            response = await self._get_client().get(self._url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Clauses endpoint returned {e.response.status_code}")
            raise CatalogueUnavailableError(
                f"Clauses endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach clauses endpoint: {e}")
            raise CatalogueUnavailableError(f"Failed to reach clauses endpoint: {e}") from e
        except ValueError as e:
            logger.error(f"Clauses endpoint returned invalid JSON: {e}")
            raise CatalogueUnavailableError("Clauses endpoint returned invalid JSON") from e

        values = payload.get("values") if isinstance(payload, dict) else None
        if not isinstance(values, list):
            logger.error("Invalid clauses payload: expected a 'values' list")
            raise CatalogueUnavailableError("Invalid clauses payload: expected a 'values' list")

        rows = [row for row in values if isinstance(row, list)]
        if len(rows) != len(values):
            logger.warning(f"Ignored {len(values) - len(rows)} malformed clause rows")
        logger.info(f"Fetched {len(rows)} clause rows")
        return rows

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

"""Catalogue provider with a time-based cache.

Holds the catalogue explicitly so it can be fetched once and injected into
each resolution call instead of living in ambient global state.
"""

import asyncio
import logging
import time

from contract_engine.interfaces.clause_source import BaseClauseSource
from contract_engine.strategies.engine.catalogue import ClauseCatalogue

logger = logging.getLogger(__name__)


class CatalogueProvider:
    """Loads the clause catalogue from a source and caches it for ``ttl_seconds``."""

    def __init__(self, source: BaseClauseSource, ttl_seconds: float = 300.0) -> None:
        self._source = source
        self._ttl = ttl_seconds
        self._catalogue: ClauseCatalogue | None = None
        self._loaded_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def source(self) -> BaseClauseSource:
        return self._source

    def _is_fresh(self) -> bool:
        if self._catalogue is None:
            return False
        if self._ttl <= 0:
            return False
        return (time.monotonic() - self._loaded_at) < self._ttl

    async def get(self, force_refresh: bool = False) -> ClauseCatalogue:
        """Return the cached catalogue, reloading it when stale.

        Raises:
            CatalogueUnavailableError: If the source cannot be read.
        """
        async with self._lock:
            if force_refresh or not self._is_fresh():
                logger.info("Refreshing clause catalogue")
                self._catalogue = await self._source.load_catalogue()
                self._loaded_at = time.monotonic()
            return self._catalogue

    def invalidate(self) -> None:
        self._catalogue = None
        logger.debug("Clause catalogue cache invalidated")

    async def aclose(self) -> None:
        await self._source.aclose()

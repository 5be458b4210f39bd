"""Abstract base class for clause catalogue sources.

The Strategy Pattern allows the clause catalogue to be loaded from
different backends (the clauses HTTP endpoint, a local JSON file, an
in-memory list) without changing the resolution engine.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contract_engine.strategies.engine.catalogue import ClauseCatalogue

logger = logging.getLogger(__name__)


class BaseClauseSource(ABC):
    """Abstract base class for clause catalogue sources.

    Concrete sources return raw rows shaped as
    ``[placeholderName, triggerValue, clauseText]``; ``load_catalogue``
    turns them into a read-only ``ClauseCatalogue``.

    Example:
        ```python
        class HttpClauseSource(BaseClauseSource):
            async def fetch_rows(self) -> list[list[Any]]:
                # Implementation here
                pass
        ```
    """

    @abstractmethod
    async def fetch_rows(self) -> list[list[Any]]:
        """Fetch the raw clause rows.

        Returns:
            A list of rows, each ``[placeholderName, triggerValue, clauseText]``.

        Raises:
            CatalogueUnavailableError: If the rows cannot be retrieved.
        """
        ...

    async def load_catalogue(self) -> "ClauseCatalogue":
        """Fetch rows and build a catalogue from them.

        Returns:
            The clause catalogue for one or more resolution passes.

        Raises:
            CatalogueUnavailableError: If the rows cannot be retrieved.
        """
        from contract_engine.strategies.engine.catalogue import ClauseCatalogue

        rows = await self.fetch_rows()
        catalogue = ClauseCatalogue.from_rows(rows)
        logger.info(
            f"Loaded clause catalogue: {len(catalogue)} clauses "
            f"for {len(catalogue.names())} placeholders"
        )
        return catalogue

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        return None

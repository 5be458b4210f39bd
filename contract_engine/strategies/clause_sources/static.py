"""Static clause catalogue source.

Serves clause rows from memory or from a local JSON file with the same
``{"values": [...]}`` shape the clauses endpoint returns. Useful for
development and tests.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from contract_engine.interfaces.clause_source import BaseClauseSource
from contract_engine.interfaces.resolution import CatalogueUnavailableError

logger = logging.getLogger(__name__)


class StaticClauseSource(BaseClauseSource):
    """Clause rows from a list or a JSON file."""

    def __init__(
        self,
        rows: Sequence[Sequence[Any]] | None = None,
        file_path: str | Path | None = None,
    ) -> None:
        if rows is None and file_path is None:
            raise ValueError("StaticClauseSource needs rows or a file path")
        self._rows = [list(row) for row in rows] if rows is not None else None
        self._file_path = Path(file_path) if file_path else None

    async def fetch_rows(self) -> list[list[Any]]:
        if self._rows is not None:
            return [list(row) for row in self._rows]

        path = self._file_path
        if not path.exists():
            raise CatalogueUnavailableError(f"Clauses file not found: {path}")

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read clauses file {path}: {e}")
            raise CatalogueUnavailableError(f"Failed to read clauses file: {e}") from e

        values = payload.get("values") if isinstance(payload, dict) else payload
        if not isinstance(values, list):
            raise CatalogueUnavailableError(
                f"Invalid clauses file {path}: expected a 'values' list"
            )
        logger.info(f"Read {len(values)} clause rows from {path}")
        return [list(row) for row in values if isinstance(row, list)]

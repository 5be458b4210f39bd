"""Read-only clause catalogue grouped by placeholder name."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from contract_engine.strategies.engine.models import Clause
from contract_engine.strategies.engine.tokens import scan_tokens

logger = logging.getLogger(__name__)


class ClauseCatalogue:
    """Clauses indexed by ``(placeholder_name, trigger_value)``.

    At most one clause exists per pair. Several clauses may share a
    placeholder name, one for each possible trigger value.
    """

    def __init__(self, clauses: Iterable[Clause] = ()) -> None:
        self._by_name: dict[str, dict[str, Clause]] = {}
        self._count = 0
        for clause in clauses:
            triggers = self._by_name.setdefault(clause.placeholder_name, {})
            if clause.trigger_value in triggers:
                logger.warning(
                    f"Duplicate clause for {clause.placeholder_name!r} with trigger "
                    f"{clause.trigger_value!r}; keeping the first definition"
                )
                continue
            triggers[clause.trigger_value] = clause
            self._count += 1

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> "ClauseCatalogue":
        """Build a catalogue from ``[placeholderName, triggerValue, clauseText]`` rows.

        Short rows are padded with empty strings. Rows without a placeholder
        name are skipped.
        """
        clauses = []
        for idx, row in enumerate(rows):
            cells = [("" if cell is None else str(cell)) for cell in list(row)[:3]]
            cells += [""] * (3 - len(cells))
            name, trigger, text = cells
            name = name.strip()
            if not name:
                logger.warning(f"Skipping clause row {idx}: missing placeholder name")
                continue
            clauses.append(Clause(placeholder_name=name, trigger_value=trigger, text=text))
        return cls(clauses)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Clause]:
        for triggers in self._by_name.values():
            yield from triggers.values()

    def names(self) -> frozenset[str]:
        """Placeholder names that are resolved through clauses."""
        return frozenset(self._by_name)

    def is_clause_placeholder(self, name: str) -> bool:
        return name in self._by_name

    def lookup(self, name: str, trigger_value: str) -> Clause | None:
        """Return the clause for ``name`` selected by ``trigger_value``, if any."""
        return self._by_name.get(name, {}).get(trigger_value)

    def triggers(self, name: str) -> list[str]:
        """Trigger values defined for a placeholder."""
        return list(self._by_name.get(name, {}))

    def to_rows(self) -> list[list[str]]:
        """Serialize back to the row shape the clauses endpoint serves."""
        return [[c.placeholder_name, c.trigger_value, c.text] for c in self]

    def references(self) -> dict[str, set[str]]:
        """Clause placeholders each clause placeholder can introduce."""
        graph: dict[str, set[str]] = {}
        for clause in self:
            nested = {name for name in scan_tokens(clause.text) if name in self._by_name}
            graph.setdefault(clause.placeholder_name, set()).update(nested)
        return graph

    def find_cycles(self) -> list[list[str]]:
        """Return clause reference cycles, each as a path that starts and ends on the same name.

        Any cycle means expansion may only stop at the iteration bound for
        answers that select the clauses involved.
        """
        graph = self.references()
        cycles: list[list[str]] = []
        seen: set[frozenset[str]] = set()
        visited: set[str] = set()

        def visit(name: str, path: list[str]) -> None:
            for nested in sorted(graph.get(name, ())):
                if nested in path:
                    cycle = path[path.index(nested):] + [nested]
                    key = frozenset(cycle)
                    if key not in seen:
                        seen.add(key)
                        cycles.append(cycle)
                elif nested not in visited:
                    visit(nested, path + [nested])
            visited.add(name)

        for name in sorted(graph):
            if name not in visited:
                visit(name, [name])
        return cycles

"""Iterative clause expansion.

Clause texts may themselves contain clause placeholders (nested clauses), so
expansion repeats until a pass changes nothing or the iteration bound is hit.
"""

import logging

from contract_engine.interfaces.resolution import ClauseExpansionLimitError
from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.catalogue import ClauseCatalogue
from contract_engine.strategies.engine.models import MissingClause, ResolutionReport
from contract_engine.strategies.engine.tokens import ordered_tokens, replace_tokens

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10


class ClauseResolver:
    """Expands clause placeholders to a fixed point.

    On every pass the text is rescanned. Each clause placeholder with a
    non-empty answer is replaced everywhere by the clause selected by that
    answer, or removed when the catalogue has no clause for it. Clause
    placeholders without an answer are left for the generic substitution
    step.
    """

    def __init__(
        self,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        strict: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            max_iterations: Safety limit on expansion passes. Not a semantic
                guarantee about nesting depth.
            strict: Raise ClauseExpansionLimitError instead of returning
                best-effort text when the limit is reached.
        """
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self._max_iterations = max_iterations
        self._strict = strict

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def _pending(self, text: str, catalogue: ClauseCatalogue, answers: AnswerMap) -> list[str]:
        return [
            name
            for name in ordered_tokens(text)
            if catalogue.is_clause_placeholder(name) and answers.has_value(name)
        ]

    def expand(
        self,
        text: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        report: ResolutionReport | None = None,
    ) -> tuple[str, ResolutionReport]:
        """Expand clause placeholders in ``text``.

        Args:
            text: Template text (a section, paragraph or preview fragment).
            catalogue: Clause catalogue for this pass.
            answers: Form answers for this pass.
            report: Report to record into; a new one is created if omitted.

        Returns:
            Tuple of (expanded text, report).

        Raises:
            ClauseExpansionLimitError: In strict mode, when clause placeholders
                remain after the last allowed pass.
        """
        report = report if report is not None else ResolutionReport()
        current = text
        iterations = 0

        while iterations < self._max_iterations:
            pending = self._pending(current, catalogue, answers)
            if not pending:
                break
            iterations += 1

            replacements: dict[str, str] = {}
            for name in pending:
                answer = answers.text(name)
                clause = catalogue.lookup(name, answer)
                if clause is None:
                    logger.warning(
                        f"No clause defined for {name!r} with value {answer!r}; removing placeholder"
                    )
                    report.missing_clauses.append(
                        MissingClause(placeholder_name=name, answer=answer)
                    )
                    replacements[name] = ""
                elif clause.is_blank:
                    logger.debug(f"Clause {name!r}={answer!r} is intentionally blank")
                    report.blank_clauses.append(name)
                    replacements[name] = ""
                else:
                    logger.debug(f"Applying clause {name!r}={answer!r}")
                    report.clauses_applied.append(name)
                    replacements[name] = clause.text

            current = replace_tokens(current, replacements)

        report.iterations = max(report.iterations, iterations)

        leftover = self._pending(current, catalogue, answers)
        if leftover:
            report.unresolved_clauses.extend(leftover)
            if self._strict:
                raise ClauseExpansionLimitError(leftover, iterations)
            logger.warning(
                f"Clause expansion stopped after {iterations} iterations with unresolved "
                f"placeholders {leftover}; possible circular clause reference"
            )

        return current, report

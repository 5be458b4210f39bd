"""Generic placeholder substitution, the last step of a resolution pass."""

import logging
from collections.abc import Iterable

from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.models import ResolutionReport
from contract_engine.strategies.engine.tokens import map_tokens, strip_tokens

logger = logging.getLogger(__name__)


class PlaceholderSubstituter:
    """Replaces remaining ``{{name}}`` tokens with their answers.

    Tokens without an answer are removed, hidden placeholders included.
    Answer values are inserted with any token markers stripped, so the
    output never contains tokens and a second run changes nothing.
    """

    def __init__(
        self,
        hidden_placeholders: Iterable[str] = (),
        reserved: Iterable[str] = (),
    ) -> None:
        """Initialize the substituter.

        Args:
            hidden_placeholders: Names suppressed until answered.
            reserved: Names always cleared (handled by an earlier step).
        """
        self._hidden = frozenset(hidden_placeholders)
        self._reserved = frozenset(reserved)

    @property
    def hidden_placeholders(self) -> frozenset[str]:
        return self._hidden

    def is_hidden(self, name: str) -> bool:
        return name in self._hidden

    def substitute(
        self,
        text: str,
        answers: AnswerMap,
        report: ResolutionReport | None = None,
    ) -> tuple[str, ResolutionReport]:
        """Substitute every remaining token in ``text``."""
        report = report if report is not None else ResolutionReport()

        def replace(name: str) -> str:
            value = "" if name in self._reserved else answers.text(name)
            if value:
                report.substituted.append(name)
                return strip_tokens(value)
            report.removed.append(name)
            if name in self._hidden:
                logger.debug(f"Suppressed hidden placeholder {name!r}")
            else:
                logger.debug(f"Removed unanswered placeholder {name!r}")
            return ""

        # A value next to stray template braces can still form a marker
        return strip_tokens(map_tokens(text, replace)), report

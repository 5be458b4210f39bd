"""Interactive contract preview rendering.

Produces the HTML shown next to the contract form: every placeholder is
wrapped in a ``preview-placeholder`` span so the page can highlight it,
unanswered fields show a blank line, hidden fields stay invisible and
selected clauses are expanded in place.
"""

import html
import logging
from collections.abc import Iterable

from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.catalogue import ClauseCatalogue
from contract_engine.strategies.engine.clauses import DEFAULT_MAX_ITERATIONS
from contract_engine.strategies.engine.logo import (
    DEFAULT_LOGO_HEIGHT_PT,
    DEFAULT_LOGO_WIDTH_PT,
    LOGO_FLAG_PLACEHOLDER,
    LOGO_URL_PLACEHOLDER,
)
from contract_engine.strategies.engine.tokens import map_tokens

logger = logging.getLogger(__name__)

BLANK_MARKER = "_________"


class PreviewRenderer:
    """Renders an HTML preview of a contract template."""

    def __init__(
        self,
        hidden_placeholders: Iterable[str] = (),
        max_depth: int = DEFAULT_MAX_ITERATIONS,
        logo_width_pt: float = DEFAULT_LOGO_WIDTH_PT,
        logo_height_pt: float = DEFAULT_LOGO_HEIGHT_PT,
    ) -> None:
        """Initialize the renderer.

        Args:
            hidden_placeholders: Names shown as nothing until answered.
            max_depth: Nesting limit for clauses that contain clauses.
            logo_width_pt: Logo width in the preview.
            logo_height_pt: Logo height in the preview.
        """
        self._hidden = frozenset(hidden_placeholders)
        self._max_depth = max_depth
        self._logo_width = logo_width_pt
        self._logo_height = logo_height_pt

    def render(
        self,
        template: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        suppressed: Iterable[str] = (),
    ) -> str:
        """Render the preview HTML.

        Args:
            template: Template HTML containing ``{{name}}`` placeholders.
            catalogue: Clause catalogue for this pass.
            answers: Current form answers.
            suppressed: Extra names to hide regardless of their answers
                (e.g. spouse fields of an unmarried party).

        Returns:
            The preview HTML.
        """
        return self._render_fragment(template, catalogue, answers, frozenset(suppressed), 0)

    def _render_fragment(
        self,
        text: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        suppressed: frozenset[str],
        depth: int,
    ) -> str:
        return map_tokens(
            text,
            lambda name: self._render_token(name, catalogue, answers, suppressed, depth),
        )

    def _span(self, name: str, content: str = "", css: str = "") -> str:
        classes = "preview-placeholder" + (f" {css}" if css else "")
        return (
            f'<span class="{classes}" data-placeholder="{html.escape(name, quote=True)}">'
            f"{content}</span>"
        )

    def _render_token(
        self,
        name: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        suppressed: frozenset[str],
        depth: int,
    ) -> str:
        value = answers.text(name)

        if name in suppressed:
            return self._span(name, css="hidden")

        if name == LOGO_FLAG_PLACEHOLDER:
            return self._span(name, css="hidden")
        if name == LOGO_URL_PLACEHOLDER:
            if answers.is_affirmative(LOGO_FLAG_PLACEHOLDER) and value:
                img = (
                    f'<img class="preview-logo" src="{html.escape(value, quote=True)}" '
                    f'width="{self._logo_width:g}" height="{self._logo_height:g}" alt="logo">'
                )
                return self._span(name, img)
            return self._span(name, css="hidden")

        if catalogue.is_clause_placeholder(name) and value:
            clause = catalogue.lookup(name, value)
            if clause is None:
                logger.debug(f"Preview: no clause for {name!r}={value!r}")
                return self._span(name, css="hidden")
            if clause.is_blank:
                return self._span(name, css="hidden")
            if depth >= self._max_depth:
                logger.warning(
                    f"Preview clause nesting exceeded {self._max_depth} levels at {name!r}; "
                    "possible circular clause reference"
                )
                return self._span(name, css="hidden")
            inner = self._render_fragment(clause.text, catalogue, answers, suppressed, depth + 1)
            return self._span(name, f'<span class="preview-clause">{inner}</span>', css="clause")

        if name in self._hidden and not value:
            return self._span(name, css="hidden")

        if value:
            return self._span(name, f'<span class="preview-value">{html.escape(value)}</span>')

        css = "nestedclause" if depth > 0 else ""
        return self._span(name, BLANK_MARKER, css=css)

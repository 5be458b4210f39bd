"""Contract text resolver.

Runs one resolution pass over a text block:
Scan -> ExpandClauses (bounded loop) -> ResolveLogo -> SubstituteGeneric.
"""

import logging
from collections.abc import Callable, Mapping

from contract_engine.interfaces.image_fetcher import FetchedImage
from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.catalogue import ClauseCatalogue
from contract_engine.strategies.engine.clauses import ClauseResolver
from contract_engine.strategies.engine.logo import LogoResolver, text_image_reference
from contract_engine.strategies.engine.models import ResolutionReport, ResolvedDocument
from contract_engine.strategies.engine.substitution import PlaceholderSubstituter
from contract_engine.strategies.engine.tokens import scan_tokens

logger = logging.getLogger(__name__)


class ContractResolver:
    """Resolves clause, logo and plain placeholders in text.

    Stateless between calls: every call receives its own catalogue and
    answers, so one instance can serve concurrent requests.

    Example:
        ```python
        resolver = ContractResolver(ClauseResolver(), LogoResolver(fetcher), substituter)
        document = await resolver.resolve(template, catalogue, answers)
        print(document.text)
        ```
    """

    def __init__(
        self,
        clause_resolver: ClauseResolver,
        logo_resolver: LogoResolver,
        substituter: PlaceholderSubstituter,
    ) -> None:
        self.clause_resolver = clause_resolver
        self.logo_resolver = logo_resolver
        self.substituter = substituter

    async def resolve(
        self,
        template: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        embed: Callable[[FetchedImage], str] = text_image_reference,
    ) -> ResolvedDocument:
        """Resolve a single text block.

        Args:
            template: Text containing ``{{name}}`` placeholders.
            catalogue: Clause catalogue for this pass.
            answers: Form answers for this pass.
            embed: Converts the downloaded logo into sink markup.

        Returns:
            The resolved text and its report.

        Raises:
            ClauseExpansionLimitError: When the clause resolver runs in strict
                mode and the iteration bound is reached.
        """
        report = ResolutionReport()
        if not scan_tokens(template):
            return ResolvedDocument(text=template, report=report)

        text, report = self.clause_resolver.expand(template, catalogue, answers, report)
        text, report = await self.logo_resolver.resolve(text, answers, report, embed=embed)
        text, report = self.substituter.substitute(text, answers, report)

        logger.info(
            f"Resolved text: {len(report.clauses_applied)} clauses applied, "
            f"{len(report.substituted)} placeholders filled, "
            f"{len(report.removed)} removed, logo={report.logo_status.value}"
        )
        return ResolvedDocument(text=text, report=report)

    async def resolve_sections(
        self,
        sections: Mapping[str, str],
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        embed: Callable[[FetchedImage], str] = text_image_reference,
    ) -> dict[str, ResolvedDocument]:
        """Resolve several logical sections (body, header, footer) independently."""
        resolved: dict[str, ResolvedDocument] = {}
        for name, text in sections.items():
            logger.debug(f"Resolving section {name!r}")
            resolved[name] = await self.resolve(text, catalogue, answers, embed=embed)
        return resolved

"""Clause and placeholder resolution engine.

Implements token scanning, iterative clause expansion, conditional logo
embedding, generic placeholder substitution, title derivation, the HTML
preview and the Word contract renderer.
"""

from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.catalogue import ClauseCatalogue
from contract_engine.strategies.engine.clauses import ClauseResolver
from contract_engine.strategies.engine.derived import derive_answers
from contract_engine.strategies.engine.docx_renderer import DocxContractRenderer
from contract_engine.strategies.engine.hidden import load_hidden_placeholders
from contract_engine.strategies.engine.logo import LogoResolver
from contract_engine.strategies.engine.models import (
    Clause,
    LogoStatus,
    ResolutionReport,
    ResolvedDocument,
)
from contract_engine.strategies.engine.preview import PreviewRenderer
from contract_engine.strategies.engine.resolver import ContractResolver
from contract_engine.strategies.engine.substitution import PlaceholderSubstituter
from contract_engine.strategies.engine.title import derive_title
from contract_engine.strategies.engine.tokens import scan_tokens
from contract_engine.strategies.engine.visibility import (
    suppressed_placeholders,
    visible_sections,
)

__all__ = [
    "AnswerMap",
    "Clause",
    "ClauseCatalogue",
    "ClauseResolver",
    "ContractResolver",
    "DocxContractRenderer",
    "LogoResolver",
    "LogoStatus",
    "PlaceholderSubstituter",
    "PreviewRenderer",
    "ResolutionReport",
    "ResolvedDocument",
    "derive_answers",
    "derive_title",
    "load_hidden_placeholders",
    "scan_tokens",
    "suppressed_placeholders",
    "visible_sections",
]

"""Contract template rendering interfaces.

Defines abstract base classes for turning a contract template plus form
answers into a finished document.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contract_engine.strategies.engine.answers import AnswerMap
    from contract_engine.strategies.engine.catalogue import ClauseCatalogue


@dataclass(frozen=True)
class RenderedContract:
    """A generated contract file.

    Attributes:
        path: Where the document was saved.
        title: Human-readable document name.
        sections: Per-section resolution reports keyed by section name
            (``body``, ``header``, ``footer``).
        metadata: Additional renderer-specific information.
    """

    path: str
    title: str
    sections: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)


class BaseTemplateRenderer(ABC):
    """Abstract base class for contract document renderers.

    Resolves clauses, the agency logo and plain placeholders in every
    section of a template and saves the result.
    """

    @abstractmethod
    async def render(
        self,
        template_path: str,
        catalogue: "ClauseCatalogue",
        answers: "AnswerMap",
        output_path: str | None = None,
    ) -> RenderedContract:
        """Render a contract from a template.

        Args:
            template_path: Path to the template document.
            catalogue: Clause catalogue for this resolution pass.
            answers: Form answers for this resolution pass.
            output_path: Where to save the result (optional).

        Returns:
            The rendered contract.

        Raises:
            FileNotFoundError: If the template doesn't exist.
            TemplateRenderError: If rendering fails.
        """

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""

    def supports_file(self, file_path: str) -> bool:
        """Check if this renderer supports the given template file.

        Args:
            file_path: The path to the file to check.

        Returns:
            True if the file extension is supported, False otherwise.
        """
        import os

        _, ext = os.path.splitext(file_path)
        return ext.lower() in self.supported_extensions

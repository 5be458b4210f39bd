"""Resolution error types.

Exceptions raised by the clause and placeholder resolution engine and its
collaborators (clause catalogue sources, image fetchers, document renderers).
"""


class ResolutionError(Exception):
    """Base exception for contract resolution failures."""

    pass


class CatalogueUnavailableError(ResolutionError):
    """Raised when the clause catalogue cannot be loaded.

    Without clause data there is nothing to resolve against, so this is a
    terminal failure for the whole resolution pass.
    """

    pass


class ClauseExpansionLimitError(ResolutionError):
    """Raised in strict mode when clause expansion hits the iteration bound.

    Attributes:
        unresolved: Clause placeholder names still present in the text.
        iterations: Number of expansion passes performed.
    """

    def __init__(self, unresolved: list[str], iterations: int) -> None:
        self.unresolved = unresolved
        self.iterations = iterations
        super().__init__(
            f"Clause expansion did not converge after {iterations} iterations; "
            f"unresolved placeholders: {', '.join(unresolved)}"
        )


class ImageFetchError(ResolutionError):
    """Raised when an image (agency logo) cannot be downloaded."""

    pass


class TemplateRenderError(ResolutionError):
    """Raised when a document template cannot be rendered."""

    pass

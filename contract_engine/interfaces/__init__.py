"""Abstract base classes for contract resolution strategies."""

from contract_engine.interfaces.clause_source import BaseClauseSource
from contract_engine.interfaces.image_fetcher import BaseImageFetcher, FetchedImage
from contract_engine.interfaces.resolution import (
    CatalogueUnavailableError,
    ClauseExpansionLimitError,
    ImageFetchError,
    ResolutionError,
    TemplateRenderError,
)
from contract_engine.interfaces.template import BaseTemplateRenderer, RenderedContract

__all__ = [
    "BaseClauseSource",
    "BaseImageFetcher",
    "BaseTemplateRenderer",
    "FetchedImage",
    "RenderedContract",
    "ResolutionError",
    "CatalogueUnavailableError",
    "ClauseExpansionLimitError",
    "ImageFetchError",
    "TemplateRenderError",
]

"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from contract_engine.core.config import Settings, get_settings
from contract_engine.interfaces.clause_source import BaseClauseSource
from contract_engine.interfaces.image_fetcher import BaseImageFetcher
from contract_engine.interfaces.template import BaseTemplateRenderer
from contract_engine.strategies.clause_sources import (
    CatalogueProvider,
    HttpClauseSource,
    StaticClauseSource,
)
from contract_engine.strategies.engine import (
    ClauseResolver,
    ContractResolver,
    DocxContractRenderer,
    LogoResolver,
    PlaceholderSubstituter,
    PreviewRenderer,
    load_hidden_placeholders,
)
from contract_engine.strategies.engine.logo import LOGO_PLACEHOLDERS
from contract_engine.strategies.image_fetchers import HttpImageFetcher

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        settings = get_settings()
        factory = ComponentFactory(settings)

        catalogue = await factory.get_catalogue_provider().get()
        resolver = factory.get_contract_resolver()
        renderer = factory.get_template_renderer()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._clause_source_cache: BaseClauseSource | None = None
        self._catalogue_provider_cache: CatalogueProvider | None = None
        self._image_fetcher_cache: BaseImageFetcher | None = None
        self._hidden_cache: frozenset[str] | None = None
        self._contract_resolver_cache: ContractResolver | None = None
        self._preview_renderer_cache: PreviewRenderer | None = None
        self._template_renderer_cache: BaseTemplateRenderer | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_clause_source(self, source_type: str | None = None) -> BaseClauseSource:
        """Get a clause source instance based on the specified type.

        Args:
            source_type: The source type to instantiate. If None, uses settings.

        Returns:
            A BaseClauseSource implementation instance.

        Raises:
            ValueError: If the source type is unknown or misconfigured.
        """
        if self._clause_source_cache is None or source_type is not None:
            source_type = source_type or self._settings.clause_source_type

            logger.info(f"Instantiating clause source: {source_type}")

            match source_type:
                case "http":
                    if not self._settings.clauses_url:
                        raise ValueError("CLAUSES_URL is required for the http clause source")
                    self._clause_source_cache = HttpClauseSource(
                        url=self._settings.clauses_url,
                        timeout=self._settings.clauses_fetch_timeout,
                    )
                case "static":
                    if self._settings.clauses_file is None:
                        raise ValueError("CLAUSES_FILE is required for the static clause source")
                    self._clause_source_cache = StaticClauseSource(
                        file_path=self._settings.clauses_file,
                    )
                case _:
                    raise ValueError(
                        f"Unknown clause source type: {source_type}. "
                        f"Valid options: 'http', 'static'"
                    )

        return self._clause_source_cache

    def get_catalogue_provider(self) -> CatalogueProvider:
        """Get the cached catalogue provider."""
        if self._catalogue_provider_cache is None:
            logger.info("Instantiating catalogue provider")
            self._catalogue_provider_cache = CatalogueProvider(
                source=self.get_clause_source(),
                ttl_seconds=self._settings.clauses_cache_ttl_seconds,
            )
        return self._catalogue_provider_cache

    def get_image_fetcher(self) -> BaseImageFetcher:
        """Get the image fetcher used for the agency logo."""
        if self._image_fetcher_cache is None:
            logger.info("Instantiating image fetcher")
            self._image_fetcher_cache = HttpImageFetcher(
                timeout=self._settings.image_fetch_timeout,
            )
        return self._image_fetcher_cache

    def get_hidden_placeholders(self) -> frozenset[str]:
        """Get the hidden placeholder set from the configured file."""
        if self._hidden_cache is None:
            self._hidden_cache = load_hidden_placeholders(
                self._settings.hidden_placeholders_file,
                extra=self._settings.extra_hidden_placeholder_names,
            )
        return self._hidden_cache

    def get_contract_resolver(self) -> ContractResolver:
        """Get the text resolver wiring clause, logo and substitution steps."""
        if self._contract_resolver_cache is None:
            logger.info("Instantiating contract resolver")
            self._contract_resolver_cache = ContractResolver(
                clause_resolver=ClauseResolver(
                    max_iterations=self._settings.clause_max_iterations,
                    strict=self._settings.clause_strict_iterations,
                ),
                logo_resolver=LogoResolver(
                    fetcher=self.get_image_fetcher(),
                    width_pt=self._settings.logo_width_pt,
                    height_pt=self._settings.logo_height_pt,
                ),
                substituter=PlaceholderSubstituter(
                    hidden_placeholders=self.get_hidden_placeholders(),
                    reserved=LOGO_PLACEHOLDERS,
                ),
            )
        return self._contract_resolver_cache

    def get_preview_renderer(self) -> PreviewRenderer:
        """Get the HTML preview renderer."""
        if self._preview_renderer_cache is None:
            logger.info("Instantiating preview renderer")
            self._preview_renderer_cache = PreviewRenderer(
                hidden_placeholders=self.get_hidden_placeholders(),
                max_depth=self._settings.clause_max_iterations,
                logo_width_pt=self._settings.logo_width_pt,
                logo_height_pt=self._settings.logo_height_pt,
            )
        return self._preview_renderer_cache

    def get_template_renderer(self) -> BaseTemplateRenderer:
        """Get the Word contract renderer."""
        if self._template_renderer_cache is None:
            logger.info("Instantiating template renderer")
            self._template_renderer_cache = DocxContractRenderer(
                resolver=self.get_contract_resolver(),
                output_dir=self._settings.output_dir,
            )
        return self._template_renderer_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._clause_source_cache = None
        self._catalogue_provider_cache = None
        self._image_fetcher_cache = None
        self._hidden_cache = None
        self._contract_resolver_cache = None
        self._preview_renderer_cache = None
        self._template_renderer_cache = None
        logger.debug("Component factory cache cleared")

    async def aclose(self) -> None:
        """Close network clients held by cached components."""
        if self._catalogue_provider_cache is not None:
            await self._catalogue_provider_cache.aclose()
        elif self._clause_source_cache is not None:
            await self._clause_source_cache.aclose()
        if self._image_fetcher_cache is not None:
            await self._image_fetcher_cache.aclose()


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory

"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Clause catalogue
    clause_source_type: str = Field(
        default="http",
        description="Clause source strategy to use: 'http' or 'static'.",
    )
    clauses_url: str = Field(
        default="",
        description="Clauses endpoint serving {'values': [[name, trigger, text], ...]}.",
    )
    clauses_file: Path | None = Field(
        default=None,
        description="JSON file with clause rows for the 'static' source.",
    )
    clauses_fetch_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for the clauses request.",
    )
    clauses_cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="How long a fetched catalogue is reused. 0 disables caching.",
    )

    # Resolution
    clause_max_iterations: int = Field(
        default=10,
        ge=1,
        description="Safety limit on nested clause expansion passes.",
    )
    clause_strict_iterations: bool = Field(
        default=False,
        description="Fail instead of returning best-effort text when the limit is hit.",
    )
    affirmative_value: str = Field(
        default="si",
        description="Answer sentinel meaning 'yes' in boolean-like form fields.",
    )
    hidden_placeholders_file: Path | None = Field(
        default=None,
        description="JSON file listing hidden placeholders. Defaults to the packaged list.",
    )
    extra_hidden_placeholders: str = Field(
        default="",
        description="Comma-separated placeholder names to hide in addition to the file.",
    )

    # Logo
    image_fetch_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Timeout in seconds for the agency logo download.",
    )
    logo_width_pt: float = Field(default=140.0, gt=0, description="Logo width in points.")
    logo_height_pt: float = Field(default=35.0, gt=0, description="Logo height in points.")

    # Documents
    template_path: Path = Field(
        default=Path("./templates/contrato-locacion-vivienda.docx"),
        description="Word template for contract generation.",
    )
    output_dir: Path = Field(
        default=Path("./output"),
        description="Directory for generated contracts.",
    )
    generation_secret: str | None = Field(
        default=None,
        description="Shared secret required by the generate endpoint when set.",
    )

    # API
    allowed_origins: str = Field(
        default="https://www.inmoacuerdos.com,https://inmoacuerdos.webflow.io",
        description="Comma-separated CORS origins.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )

    @field_validator("output_dir")
    @classmethod
    def ensure_output_dir(cls, v: Path) -> Path:
        """Ensure output directory exists."""
        v.mkdir(parents=True, exist_ok=True)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("clause_source_type")
    @classmethod
    def normalize_source_type(cls, v: str) -> str:
        """Normalize clause source type to lowercase."""
        return v.strip().lower()

    @property
    def extra_hidden_placeholder_names(self) -> list[str]:
        return [name.strip() for name in self.extra_hidden_placeholders.split(",") if name.strip()]

    @property
    def allowed_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings

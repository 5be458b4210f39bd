"""Conditional agency logo embedding.

Runs after clause expansion (clauses may introduce the logo placeholder)
and before generic substitution, which must not see these two tokens.
"""

import base64
import html
import logging
from collections.abc import Callable

from contract_engine.interfaces.image_fetcher import BaseImageFetcher, FetchedImage
from contract_engine.interfaces.resolution import ImageFetchError
from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.models import LogoStatus, ResolutionReport
from contract_engine.strategies.engine.tokens import make_token

logger = logging.getLogger(__name__)

LOGO_FLAG_PLACEHOLDER = "deseaLogoInmobiliaria"
LOGO_URL_PLACEHOLDER = "logoInmobiliaria"
LOGO_FLAG_TOKEN = make_token(LOGO_FLAG_PLACEHOLDER)
LOGO_TOKEN = make_token(LOGO_URL_PLACEHOLDER)
LOGO_PLACEHOLDERS = frozenset({LOGO_FLAG_PLACEHOLDER, LOGO_URL_PLACEHOLDER})

LOGO_ERROR_MARKER = "Error al cargar imagen de logo"
DEFAULT_LOGO_WIDTH_PT = 140
DEFAULT_LOGO_HEIGHT_PT = 35


def text_image_reference(image: FetchedImage) -> str:
    """Plain-text stand-in for an embedded image."""
    return f"[imagen: {image.url}]"


class LogoResolver:
    """Embeds the agency logo when the form asks for it.

    The logo is embedded when ``deseaLogoInmobiliaria`` is affirmative and
    ``logoInmobiliaria`` holds a URL. A failed download is replaced by a
    visible error marker instead of aborting the resolution pass.
    """

    def __init__(
        self,
        fetcher: BaseImageFetcher | None = None,
        width_pt: float = DEFAULT_LOGO_WIDTH_PT,
        height_pt: float = DEFAULT_LOGO_HEIGHT_PT,
    ) -> None:
        self._fetcher = fetcher
        self.width_pt = width_pt
        self.height_pt = height_pt

    def requested_url(self, answers: AnswerMap) -> str | None:
        """Return the logo URL when the logo should be embedded, else None."""
        url = answers.text(LOGO_URL_PLACEHOLDER).strip()
        if answers.is_affirmative(LOGO_FLAG_PLACEHOLDER) and url:
            return url
        return None

    async def fetch(self, url: str) -> FetchedImage | None:
        """Download the logo, returning None on failure."""
        if self._fetcher is None:
            logger.warning("Logo requested but no image fetcher is configured")
            return None
        try:
            return await self._fetcher.fetch(url)
        except ImageFetchError as e:
            logger.warning(f"Failed to fetch logo from {url}: {e}")
            return None

    def html_image_tag(self, image: FetchedImage) -> str:
        """Inline ``<img>`` tag carrying the image as a data URI."""
        encoded = base64.b64encode(image.content).decode("ascii")
        return (
            f'<img class="preview-logo" src="data:{html.escape(image.content_type)};base64,{encoded}" '
            f'width="{self.width_pt:g}" height="{self.height_pt:g}" alt="logo">'
        )

    async def resolve(
        self,
        text: str,
        answers: AnswerMap,
        report: ResolutionReport | None = None,
        embed: Callable[[FetchedImage], str] = text_image_reference,
    ) -> tuple[str, ResolutionReport]:
        """Resolve the logo placeholders in ``text``.

        Args:
            text: Text after clause expansion.
            answers: Form answers.
            report: Report to record into.
            embed: Turns the downloaded image into output markup for the sink.

        Returns:
            Tuple of (text without logo placeholders, report).
        """
        report = report if report is not None else ResolutionReport()
        url = self.requested_url(answers)

        if url is None:
            report.logo_status = LogoStatus.NOT_REQUESTED
            text = text.replace(LOGO_TOKEN, "")
        elif LOGO_TOKEN not in text:
            logger.warning(
                f"Logo requested but {LOGO_TOKEN} is not present after clause expansion"
            )
            report.logo_status = LogoStatus.PLACEHOLDER_MISSING
        else:
            image = await self.fetch(url)
            if image is None:
                report.logo_status = LogoStatus.FAILED
                text = text.replace(LOGO_TOKEN, LOGO_ERROR_MARKER)
            else:
                before, _, after = text.partition(LOGO_TOKEN)
                text = before + embed(image) + after.replace(LOGO_TOKEN, "")
                report.logo_status = LogoStatus.EMBEDDED
                logger.info(f"Embedded logo from {url}")

        return text.replace(LOGO_FLAG_TOKEN, ""), report

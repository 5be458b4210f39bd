"""Word contract renderer.

Resolves clauses, the agency logo and plain placeholders in a .docx
template while preserving the formatting of each paragraph.
"""

import io
import logging
import re
from pathlib import Path
from typing import Any

from docx import Document
from docx.shared import Pt

from contract_engine.interfaces.image_fetcher import FetchedImage
from contract_engine.interfaces.resolution import ClauseExpansionLimitError, TemplateRenderError
from contract_engine.interfaces.template import BaseTemplateRenderer, RenderedContract
from contract_engine.strategies.engine.answers import AnswerMap
from contract_engine.strategies.engine.catalogue import ClauseCatalogue
from contract_engine.strategies.engine.logo import LOGO_ERROR_MARKER, LOGO_FLAG_TOKEN, LOGO_TOKEN
from contract_engine.strategies.engine.models import LogoStatus, ResolutionReport
from contract_engine.strategies.engine.resolver import ContractResolver
from contract_engine.strategies.engine.title import derive_title
from contract_engine.strategies.engine.tokens import TOKEN_PATTERN

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\r\n\t]+')


def safe_filename(title: str) -> str:
    """Turn a document title into a file name."""
    name = _UNSAFE_FILENAME_CHARS.sub("-", title).strip(" .-")
    return name or "contrato"


def _iter_paragraphs(container: Any):
    """Yield paragraphs of a body, header, footer or table cell, tables included."""
    yield from container.paragraphs
    for table in container.tables:
        for row in table.rows:
            for cell in row.cells:
                yield from _iter_paragraphs(cell)


def _set_paragraph_text(paragraph, text: str) -> None:
    """Replace paragraph text, keeping the style of its first run.

    Placeholders are often split across runs, so the paragraph text is
    collapsed into the first run and the remaining runs are removed.
    """
    runs = paragraph.runs
    if not runs:
        if text:
            paragraph.add_run(text)
        return
    runs[0].text = text
    for run in runs[1:]:
        run._element.getparent().remove(run._element)


class DocxContractRenderer(BaseTemplateRenderer):
    """Renders Word contracts from a template.

    The body, every header and every footer are resolved independently,
    each with its own token scan, using the same catalogue and answers.
    The logo is downloaded at most once per document and embedded at the
    first ``{{logoInmobiliaria}}`` of each section.

    Limitation: a paragraph containing a placeholder is rewritten as a
    single run with the formatting of its first run. Inline formatting of
    later runs (bold words, pictures already in the paragraph) is lost, so
    templates should keep placeholders in plainly formatted paragraphs.
    Paragraphs without placeholders are left untouched.
    """

    def __init__(
        self,
        resolver: ContractResolver,
        output_dir: str | Path | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            resolver: Text resolver providing the clause, logo and
                substitution steps.
            output_dir: Default directory for generated files. Defaults to
                the template's directory.
        """
        self._resolver = resolver
        self._output_dir = Path(output_dir) if output_dir else None

    async def render(
        self,
        template_path: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        output_path: str | None = None,
    ) -> RenderedContract:
        """Render a contract from a Word template.

        Args:
            template_path: Path to the .docx template.
            catalogue: Clause catalogue for this pass.
            answers: Form answers for this pass.
            output_path: Where to save the contract (optional).

        Returns:
            The rendered contract with per-section reports.

        Raises:
            FileNotFoundError: If the template doesn't exist.
            ClauseExpansionLimitError: In strict mode, when clause expansion
                doesn't converge.
            TemplateRenderError: If rendering fails.
        """
        logger.info(f"Starting contract rendering: {template_path}")

        try:
            path = Path(template_path)
            if not path.exists():
                raise FileNotFoundError(f"Template file not found: {template_path}")

            doc = Document(str(path))
            title = derive_title(answers)
            images: dict[str, FetchedImage | None] = {}

            reports: dict[str, ResolutionReport] = {
                "body": await self._resolve_container(doc, "body", catalogue, answers, images)
            }
            for idx, section in enumerate(doc.sections):
                for kind, part in (("header", section.header), ("footer", section.footer)):
                    if part.is_linked_to_previous:
                        continue
                    name = kind if idx == 0 else f"{kind}_{idx}"
                    reports[name] = await self._resolve_container(
                        part, name, catalogue, answers, images
                    )

            logo_url = self._resolver.logo_resolver.requested_url(answers)
            if logo_url and all(
                r.logo_status is LogoStatus.NOT_REQUESTED for r in reports.values()
            ):
                logger.warning(
                    f"Logo requested but {LOGO_TOKEN} was not found in any section"
                )
                reports["body"].logo_status = LogoStatus.PLACEHOLDER_MISSING

            if output_path is None:
                target_dir = self._output_dir or path.parent
                output_path = str(target_dir / f"{safe_filename(title)}{path.suffix}")

            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            doc.save(output_path)
            logger.info(f"Contract saved: {output_path} ({title})")

            return RenderedContract(
                path=output_path,
                title=title,
                sections={name: r.model_dump(mode="json") for name, r in reports.items()},
                metadata={"template": path.name},
            )

        except FileNotFoundError:
            raise
        except ClauseExpansionLimitError:
            raise
        except Exception as e:
            logger.error(f"Contract rendering failed: {e}", exc_info=True)
            raise TemplateRenderError(f"Contract rendering failed: {e}") from e

    async def _logo_image(
        self, url: str, images: dict[str, FetchedImage | None]
    ) -> FetchedImage | None:
        if url not in images:
            images[url] = await self._resolver.logo_resolver.fetch(url)
        return images[url]

    async def _resolve_container(
        self,
        container: Any,
        section_name: str,
        catalogue: ClauseCatalogue,
        answers: AnswerMap,
        images: dict[str, FetchedImage | None],
    ) -> ResolutionReport:
        """Resolve every paragraph of one document section."""
        report = ResolutionReport()
        clause_resolver = self._resolver.clause_resolver
        logo_resolver = self._resolver.logo_resolver
        substituter = self._resolver.substituter
        logo_url = logo_resolver.requested_url(answers)
        logo_done = False
        changed = 0

        for paragraph in _iter_paragraphs(container):
            original = paragraph.text
            if not TOKEN_PATTERN.search(original):
                continue

            text, report = clause_resolver.expand(original, catalogue, answers, report)

            image = None
            after = ""
            if LOGO_TOKEN in text:
                if logo_url and not logo_done:
                    image = await self._logo_image(logo_url, images)
                    if image is None:
                        text = text.replace(LOGO_TOKEN, LOGO_ERROR_MARKER)
                        report.logo_status = LogoStatus.FAILED
                    else:
                        text, _, after = text.partition(LOGO_TOKEN)
                        after = after.replace(LOGO_TOKEN, "")
                    logo_done = True
                else:
                    text = text.replace(LOGO_TOKEN, "")
            text = text.replace(LOGO_FLAG_TOKEN, "")
            after = after.replace(LOGO_FLAG_TOKEN, "")

            text, report = substituter.substitute(text, answers, report)
            after, report = substituter.substitute(after, answers, report)

            self._write_paragraph(paragraph, text, image, after, report, section_name)
            changed += 1

        logger.debug(f"Section {section_name!r}: {changed} paragraphs resolved")
        return report

    def _write_paragraph(
        self,
        paragraph,
        text: str,
        image: FetchedImage | None,
        after: str,
        report: ResolutionReport,
        section_name: str,
    ) -> None:
        if image is None:
            _set_paragraph_text(paragraph, text + after)
            return

        logo_resolver = self._resolver.logo_resolver
        _set_paragraph_text(paragraph, text)
        run = paragraph.add_run()
        try:
            run.add_picture(
                io.BytesIO(image.content),
                width=Pt(logo_resolver.width_pt),
                height=Pt(logo_resolver.height_pt),
            )
            report.logo_status = LogoStatus.EMBEDDED
            logger.info(f"Logo embedded in {section_name}")
        except Exception as e:
            logger.warning(f"Could not embed logo in {section_name}: {e}")
            run._element.getparent().remove(run._element)
            paragraph.add_run(LOGO_ERROR_MARKER)
            report.logo_status = LogoStatus.FAILED
        if after:
            paragraph.add_run(after)

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".docx"}

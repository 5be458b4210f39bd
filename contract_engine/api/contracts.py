"""Contract resolution API routes.

Handles text resolution, the live HTML preview, title derivation,
Word contract generation and download.
"""

import logging
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from contract_engine.api.deps import (
    check_generation_secret,
    get_catalogue,
    get_component_factory,
    get_header_secret,
)
from contract_engine.api.schemas import (
    GenerateRequest,
    GenerateResponse,
    PreviewRequest,
    PreviewResponse,
    ResolveRequest,
    ResolveResponse,
    TitleRequest,
    TitleResponse,
)
from contract_engine.core.factory import ComponentFactory
from contract_engine.interfaces.resolution import ClauseExpansionLimitError, TemplateRenderError
from contract_engine.strategies.engine import (
    AnswerMap,
    ClauseCatalogue,
    ResolutionReport,
    derive_answers,
    derive_title,
    suppressed_placeholders,
    visible_sections,
)

logger = logging.getLogger(__name__)
events = structlog.get_logger("contract_engine.events")

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _build_answers(
    factory: ComponentFactory,
    values: dict,
    derive: bool,
) -> AnswerMap:
    answers = AnswerMap(values, affirmative=factory.settings.affirmative_value)
    return derive_answers(answers) if derive else answers


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_contract(
    request: ResolveRequest,
    factory: ComponentFactory = Depends(get_component_factory),
    catalogue: ClauseCatalogue = Depends(get_catalogue),
) -> ResolveResponse:
    """Resolve clauses, logo and placeholders in a text template.

    Raises:
        HTTPException: 422 if clause expansion doesn't converge in strict mode.
    """
    answers = _build_answers(factory, request.answers, request.derive)
    try:
        document = await factory.get_contract_resolver().resolve(
            request.template, catalogue, answers
        )
    except ClauseExpansionLimitError as e:
        logger.warning(f"Resolution rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    return ResolveResponse(
        text=document.text,
        title=derive_title(answers),
        report=document.report,
    )


@router.post("/preview", response_model=PreviewResponse)
async def preview_contract(
    request: PreviewRequest,
    factory: ComponentFactory = Depends(get_component_factory),
    catalogue: ClauseCatalogue = Depends(get_catalogue),
) -> PreviewResponse:
    """Render the live HTML preview for the current form answers."""
    answers = _build_answers(factory, request.answers, request.derive)
    html = factory.get_preview_renderer().render(
        request.template,
        catalogue,
        answers,
        suppressed=suppressed_placeholders(answers),
    )
    return PreviewResponse(
        html=html,
        title=derive_title(answers),
        visible_sections=sorted(visible_sections(answers)),
    )


@router.post("/title", response_model=TitleResponse)
async def contract_title(
    request: TitleRequest,
    factory: ComponentFactory = Depends(get_component_factory),
) -> TitleResponse:
    """Derive the document name from the answers."""
    answers = AnswerMap(request.answers, affirmative=factory.settings.affirmative_value)
    return TitleResponse(title=derive_title(answers))


@router.post(
    "/generate",
    response_model=GenerateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_contract(
    request: GenerateRequest,
    factory: ComponentFactory = Depends(get_component_factory),
    header_secret: str | None = Depends(get_header_secret),
) -> GenerateResponse:
    """Generate the Word contract from the configured template.

    Raises:
        HTTPException: 401 on a bad secret, 404 if the template is missing,
            503 if the clause catalogue is unavailable, 500 on render failure.
    """
    check_generation_secret(factory, header_secret or request.secret)

    # Checked after the secret so unauthenticated callers can't learn which clauses exist
    catalogue = await get_catalogue(factory)

    if request.answers is not None:
        values = dict(request.answers)
    else:
        values = dict(AnswerMap.from_row(request.headers, request.contract_data))
    answers = _build_answers(factory, values, request.derive)

    settings = factory.settings
    logger.info(f"Generating contract {request.contract_id or '(no id)'}")

    try:
        rendered = await factory.get_template_renderer().render(
            str(settings.template_path), catalogue, answers
        )
    except FileNotFoundError as e:
        logger.error(f"Contract template missing: {e}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract template not found",
        ) from e
    except ClauseExpansionLimitError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    except TemplateRenderError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Contract generation failed: {e}",
        ) from e

    filename = Path(rendered.path).name
    events.info(
        "contract_generated",
        contract_id=request.contract_id,
        title=rendered.title,
        filename=filename,
    )

    return GenerateResponse(
        contract_id=request.contract_id,
        title=rendered.title,
        filename=filename,
        download_url=f"{router.prefix}/download/{filename}",
        sections={
            name: ResolutionReport.model_validate(report)
            for name, report in rendered.sections.items()
        },
    )


@router.get("/download/{filename}")
async def download_contract(
    filename: str,
    factory: ComponentFactory = Depends(get_component_factory),
) -> FileResponse:
    """Download a generated contract.

    Raises:
        HTTPException: 404 if the file doesn't exist in the output directory.
    """
    output_dir = Path(factory.settings.output_dir).resolve()
    file_path = (output_dir / filename).resolve()

    if file_path.parent != output_dir or file_path.suffix != ".docx" or not file_path.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract not found",
        )

    return FileResponse(path=str(file_path), media_type=DOCX_MEDIA_TYPE, filename=filename)

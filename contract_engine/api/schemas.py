"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

# Re-export engine models used in responses
from contract_engine.strategies.engine.models import ResolutionReport

AnswerPayload = dict[str, str | bool | int | float | None]


# =============================================================================
# Resolution Schemas
# =============================================================================


class ResolveRequest(BaseModel):
    """Request schema for resolving a text template."""

    template: str = Field(description="Template text containing {{placeholder}} tokens")
    answers: AnswerPayload = Field(default_factory=dict, description="Form answers")
    derive: bool = Field(
        default=True,
        description="Compute derived fields (amounts in words, term dates) first",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "template": "Entre {{PersonasLocador}} y {{nombreLocatarioPF1}}...",
                "answers": {"PersonasLocador": "1PLocador", "nombreLocatarioPF1": "Ana Gómez"},
            }
        }


class ResolveResponse(BaseModel):
    """Response for the resolve endpoint."""

    text: str
    title: str
    report: ResolutionReport


class PreviewRequest(BaseModel):
    """Request schema for the live contract preview."""

    template: str = Field(description="Template HTML containing {{placeholder}} tokens")
    answers: AnswerPayload = Field(default_factory=dict)
    derive: bool = True


class PreviewResponse(BaseModel):
    """Response for the preview endpoint."""

    html: str
    title: str
    visible_sections: list[str]


class TitleRequest(BaseModel):
    """Request schema for title derivation."""

    answers: AnswerPayload = Field(default_factory=dict)


class TitleResponse(BaseModel):
    """Response for the title endpoint."""

    title: str


# =============================================================================
# Generation Schemas
# =============================================================================


class GenerateRequest(BaseModel):
    """Request schema for contract generation.

    Accepts either a flat ``answers`` map or the draft-row shape
    (``contract_data`` + ``headers``) posted by the draft/finalize flow.
    """

    answers: AnswerPayload | None = None
    contract_data: dict[str, Any] | None = Field(default=None, alias="contractData")
    headers: list[str] | None = None
    secret: str | None = None
    derive: bool = True

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_payload(self) -> "GenerateRequest":
        """Require answers or contract_data with headers."""
        if self.answers is None and (self.contract_data is None or not self.headers):
            raise ValueError("Provide 'answers' or both 'contractData' and 'headers'")
        return self

    @property
    def contract_id(self) -> str | None:
        if self.contract_data and self.contract_data.get("contractID"):
            return str(self.contract_data["contractID"])
        if self.answers and self.answers.get("contractID"):
            return str(self.answers["contractID"])
        return None


class GenerateResponse(BaseModel):
    """Response for the generate endpoint."""

    contract_id: str | None = None
    title: str
    filename: str
    download_url: str
    sections: dict[str, ResolutionReport]


# =============================================================================
# Catalogue Schemas
# =============================================================================


class ClausesResponse(BaseModel):
    """Clause rows in the shape the clauses endpoint serves."""

    values: list[list[str]]
    count: int


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_code: str | None = None

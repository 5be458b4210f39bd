"""Resolution engine domain models.

Pydantic models shared by the resolution strategies and the API layer.
Kept here to avoid circular imports with the API layer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Clause(BaseModel):
    """A reusable block of contract text selected by a trigger value."""

    model_config = ConfigDict(frozen=True)

    placeholder_name: str = Field(description="Placeholder the clause replaces")
    trigger_value: str = Field(description="Answer value that selects this clause")
    text: str = Field(default="", description="Clause text; empty means intentionally blank")

    @property
    def is_blank(self) -> bool:
        """Whether this clause intentionally resolves to nothing."""
        return not self.text.strip()


class LogoStatus(str, Enum):
    """Outcome of the conditional logo step."""

    NOT_REQUESTED = "not_requested"
    EMBEDDED = "embedded"
    FAILED = "failed"
    PLACEHOLDER_MISSING = "placeholder_missing"


class MissingClause(BaseModel):
    """A clause placeholder whose answer matched no catalogue entry."""

    placeholder_name: str
    answer: str


class ResolutionReport(BaseModel):
    """What happened during one resolution pass."""

    clauses_applied: list[str] = Field(default_factory=list)
    blank_clauses: list[str] = Field(default_factory=list)
    missing_clauses: list[MissingClause] = Field(default_factory=list)
    iterations: int = 0
    unresolved_clauses: list[str] = Field(default_factory=list)
    substituted: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    logo_status: LogoStatus = LogoStatus.NOT_REQUESTED

    @property
    def hit_iteration_limit(self) -> bool:
        """Whether clause expansion stopped at the iteration bound."""
        return bool(self.unresolved_clauses)

    def merge(self, other: "ResolutionReport") -> None:
        """Fold another report (e.g. another paragraph of the same section) into this one."""
        self.clauses_applied.extend(other.clauses_applied)
        self.blank_clauses.extend(other.blank_clauses)
        self.missing_clauses.extend(other.missing_clauses)
        self.iterations = max(self.iterations, other.iterations)
        self.unresolved_clauses.extend(other.unresolved_clauses)
        self.substituted.extend(other.substituted)
        self.removed.extend(other.removed)
        if other.logo_status is not LogoStatus.NOT_REQUESTED:
            self.logo_status = other.logo_status


class ResolvedDocument(BaseModel):
    """Fully resolved document text and the report of how it was produced."""

    text: str
    report: ResolutionReport = Field(default_factory=ResolutionReport)

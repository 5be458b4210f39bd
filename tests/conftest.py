"""Shared fixtures for the unit tests."""

import base64

import pytest

from contract_engine.interfaces.image_fetcher import BaseImageFetcher, FetchedImage
from contract_engine.interfaces.resolution import ImageFetchError
from contract_engine.strategies.engine import AnswerMap, ClauseCatalogue

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
LOGO_URL = "https://cdn.example.com/logo.png"

CLAUSE_ROWS = [
    ["mascotasClausula", "si", "Se permiten mascotas. {{garantiaClausula}}"],
    ["mascotasClausula", "no", "No se permiten mascotas."],
    ["garantiaClausula", "propietaria", "Garantía propietaria de {{nombreGarantePF1}}."],
    ["garantiaClausula", "seguro", "Seguro de caución."],
    ["expensasClausula", "no", ""],
    ["logoClausula", "si", "{{logoInmobiliaria}}"],
]


class FakeImageFetcher(BaseImageFetcher):
    """Image fetcher returning canned content and counting calls."""

    def __init__(self, content: bytes = PNG_BYTES, fail: bool = False) -> None:
        self.content = content
        self.fail = fail
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchedImage:
        self.calls.append(url)
        if self.fail:
            raise ImageFetchError("connection refused")
        return FetchedImage(content=self.content, content_type="image/png", url=url)


@pytest.fixture
def catalogue():
    """Catalogue with nested, blank and logo-bearing clauses."""
    return ClauseCatalogue.from_rows(CLAUSE_ROWS)


@pytest.fixture
def fetcher():
    return FakeImageFetcher()


@pytest.fixture
def failing_fetcher():
    return FakeImageFetcher(fail=True)


@pytest.fixture
def logo_answers():
    """Answers requesting the agency logo."""
    return AnswerMap(
        {
            "deseaLogoInmobiliaria": "si",
            "logoInmobiliaria": LOGO_URL,
            "nombreLocadorPF1": "Ana Gómez",
        }
    )


@pytest.fixture
def clause_rows():
    return [list(row) for row in CLAUSE_ROWS]


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def logo_url():
    return LOGO_URL

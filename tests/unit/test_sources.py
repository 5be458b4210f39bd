"""Unit tests for clause sources, the catalogue cache and the image fetcher."""

import asyncio
import json
from unittest.mock import patch

import httpx
import pytest

from contract_engine.interfaces.resolution import CatalogueUnavailableError, ImageFetchError
from contract_engine.strategies.clause_sources import (
    CatalogueProvider,
    HttpClauseSource,
    StaticClauseSource,
)
from contract_engine.strategies.engine import AnswerMap, LogoResolver, LogoStatus
from contract_engine.strategies.engine.logo import LOGO_ERROR_MARKER
from contract_engine.strategies.image_fetchers import HttpImageFetcher

CLAUSES_URL = "https://api.example.com/clauses"


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# HTTP Clause Source Tests
# =============================================================================


class TestHttpClauseSource:
    """Test suite for HttpClauseSource."""

    def test_requires_url(self):
        with pytest.raises(ValueError):
            HttpClauseSource("")

    def test_load_catalogue(self, clause_rows):
        def handler(request):
            assert str(request.url) == CLAUSES_URL
            return httpx.Response(200, json={"values": clause_rows + ["malformed"]})

        async def run_test():
            source = HttpClauseSource(CLAUSES_URL, client=mock_client(handler))
            return await source.load_catalogue()

        catalogue = asyncio.run(run_test())

        assert len(catalogue) == len(clause_rows)
        assert catalogue.lookup("mascotasClausula", "no").text == "No se permiten mascotas."

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"status_code": 500, "text": "boom"},
            {"status_code": 200, "text": "not json"},
            {"status_code": 200, "json": {"rows": []}},
            {"status_code": 200, "json": [["a", "si", "x"]]},
        ],
    )
    def test_bad_responses(self, kwargs):
        async def run_test():
            client = mock_client(lambda request: httpx.Response(**kwargs))
            source = HttpClauseSource(CLAUSES_URL, client=client)
            with pytest.raises(CatalogueUnavailableError):
                await source.fetch_rows()

        asyncio.run(run_test())

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def run_test():
            source = HttpClauseSource(CLAUSES_URL, client=mock_client(handler))
            with pytest.raises(CatalogueUnavailableError):
                await source.fetch_rows()

        asyncio.run(run_test())


# =============================================================================
# Static Clause Source Tests
# =============================================================================


class TestStaticClauseSource:
    """Test suite for StaticClauseSource."""

    def test_requires_rows_or_file(self):
        with pytest.raises(ValueError):
            StaticClauseSource()

    def test_rows(self, clause_rows):
        catalogue = asyncio.run(StaticClauseSource(rows=clause_rows).load_catalogue())
        assert len(catalogue) == len(clause_rows)

    @pytest.mark.parametrize("wrap", [True, False])
    def test_file(self, tmp_path, clause_rows, wrap):
        path = tmp_path / "clauses.json"
        payload = {"values": clause_rows} if wrap else clause_rows
        path.write_text(json.dumps(payload), encoding="utf-8")

        rows = asyncio.run(StaticClauseSource(file_path=path).fetch_rows())

        assert rows == clause_rows

    def test_missing_file(self, tmp_path):
        source = StaticClauseSource(file_path=tmp_path / "nope.json")
        with pytest.raises(CatalogueUnavailableError):
            asyncio.run(source.fetch_rows())

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "clauses.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogueUnavailableError):
            asyncio.run(StaticClauseSource(file_path=path).fetch_rows())


# =============================================================================
# Catalogue Provider Tests
# =============================================================================


class CountingSource(StaticClauseSource):
    """Static source that counts fetches."""

    def __init__(self, rows):
        super().__init__(rows=rows)
        self.fetches = 0

    async def fetch_rows(self):
        self.fetches += 1
        return await super().fetch_rows()


class TestCatalogueProvider:
    """Test suite for CatalogueProvider."""

    def test_caches_within_ttl(self, clause_rows):
        source = CountingSource(clause_rows)
        provider = CatalogueProvider(source, ttl_seconds=300)

        async def run_test():
            first = await provider.get()
            second = await provider.get()
            return first, second

        first, second = asyncio.run(run_test())

        assert first is second
        assert source.fetches == 1

    def test_refreshes_after_ttl(self, clause_rows):
        source = CountingSource(clause_rows)
        provider = CatalogueProvider(source, ttl_seconds=10)

        async def run_test():
            with patch("contract_engine.strategies.clause_sources.cache.time") as clock:
                clock.monotonic.return_value = 100.0
                await provider.get()
                clock.monotonic.return_value = 105.0
                await provider.get()
                clock.monotonic.return_value = 111.0
                await provider.get()

        asyncio.run(run_test())

        assert source.fetches == 2

    def test_zero_ttl_always_refreshes(self, clause_rows):
        source = CountingSource(clause_rows)
        provider = CatalogueProvider(source, ttl_seconds=0)

        async def run_test():
            await provider.get()
            await provider.get()

        asyncio.run(run_test())

        assert source.fetches == 2

    def test_force_refresh_and_invalidate(self, clause_rows):
        source = CountingSource(clause_rows)
        provider = CatalogueProvider(source)

        async def run_test():
            await provider.get()
            await provider.get(force_refresh=True)
            provider.invalidate()
            await provider.get()

        asyncio.run(run_test())

        assert source.fetches == 3

    def test_failure_propagates(self, tmp_path):
        provider = CatalogueProvider(StaticClauseSource(file_path=tmp_path / "nope.json"))
        with pytest.raises(CatalogueUnavailableError):
            asyncio.run(provider.get())


# =============================================================================
# Image Fetcher Tests
# =============================================================================


class TestHttpImageFetcher:
    """Test suite for HttpImageFetcher."""

    def test_fetch(self, png_bytes, logo_url):
        def handler(request):
            return httpx.Response(
                200, content=png_bytes, headers={"content-type": "image/png; charset=binary"}
            )

        async def run_test():
            return await HttpImageFetcher(client=mock_client(handler)).fetch(logo_url)

        image = asyncio.run(run_test())

        assert image.content == png_bytes
        assert image.content_type == "image/png"
        assert image.url == logo_url

    def test_rejects_non_http_url(self):
        with pytest.raises(ImageFetchError):
            asyncio.run(HttpImageFetcher().fetch("file:///etc/passwd"))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"status_code": 404},
            {"status_code": 200, "content": b""},
            {"status_code": 200, "content": b"x" * 11},
        ],
    )
    def test_bad_responses(self, kwargs, logo_url):
        async def run_test():
            client = mock_client(lambda request: httpx.Response(**kwargs))
            fetcher = HttpImageFetcher(max_bytes=10, client=client)
            with pytest.raises(ImageFetchError):
                await fetcher.fetch(logo_url)

        asyncio.run(run_test())

    def test_transport_error(self, logo_url):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async def run_test():
            with pytest.raises(ImageFetchError):
                await HttpImageFetcher(client=mock_client(handler)).fetch(logo_url)

        asyncio.run(run_test())

    def test_malformed_url(self):
        """A URL httpx can't parse is a fetch failure, not a crash."""
        client = mock_client(lambda request: httpx.Response(200, content=b"x"))

        async def run_test():
            with pytest.raises(ImageFetchError):
                await HttpImageFetcher(client=client).fetch("http://[::1")

        asyncio.run(run_test())

    def test_malformed_logo_url_becomes_marker(self, png_bytes):
        client = mock_client(lambda request: httpx.Response(200, content=png_bytes))
        resolver = LogoResolver(HttpImageFetcher(client=client))
        answers = AnswerMap(
            {"deseaLogoInmobiliaria": "si", "logoInmobiliaria": "http://[::1"}
        )

        async def run_test():
            return await resolver.resolve("A {{logoInmobiliaria}} B", answers)

        text, report = asyncio.run(run_test())

        assert text == f"A {LOGO_ERROR_MARKER} B"
        assert report.logo_status is LogoStatus.FAILED

"""Unit tests for conditional logo embedding."""

import asyncio

import pytest

from contract_engine.strategies.engine import AnswerMap, LogoResolver, LogoStatus
from contract_engine.strategies.engine.logo import LOGO_ERROR_MARKER


class TestLogoResolver:
    """Test suite for LogoResolver."""

    def test_requested_url(self, logo_answers, logo_url):
        resolver = LogoResolver()
        assert resolver.requested_url(logo_answers) == logo_url
        assert resolver.requested_url(logo_answers.merged({"deseaLogoInmobiliaria": "no"})) is None
        assert resolver.requested_url(logo_answers.merged({"logoInmobiliaria": "  "})) is None

    def test_flag_is_case_insensitive(self, logo_answers, logo_url):
        answers = logo_answers.merged({"deseaLogoInmobiliaria": "SI"})
        assert LogoResolver().requested_url(answers) == logo_url

    def test_embeds_first_occurrence(self, fetcher, logo_answers, logo_url):
        resolver = LogoResolver(fetcher)

        async def run_test():
            return await resolver.resolve(
                "{{deseaLogoInmobiliaria}}A {{logoInmobiliaria}} B {{logoInmobiliaria}}",
                logo_answers,
            )

        text, report = asyncio.run(run_test())

        assert text == f"A [imagen: {logo_url}] B "
        assert report.logo_status is LogoStatus.EMBEDDED
        assert fetcher.calls == [logo_url]

    def test_custom_embed(self, fetcher, logo_answers):
        resolver = LogoResolver(fetcher)

        async def run_test():
            return await resolver.resolve(
                "{{logoInmobiliaria}}", logo_answers, embed=resolver.html_image_tag
            )

        text, _ = asyncio.run(run_test())

        assert text.startswith('<img class="preview-logo" src="data:image/png;base64,')
        assert 'width="140" height="35"' in text

    def test_fetch_failure_inserts_marker(self, failing_fetcher, logo_answers):
        resolver = LogoResolver(failing_fetcher)

        async def run_test():
            return await resolver.resolve("Logo: {{logoInmobiliaria}}", logo_answers)

        text, report = asyncio.run(run_test())

        assert text == f"Logo: {LOGO_ERROR_MARKER}"
        assert report.logo_status is LogoStatus.FAILED

    def test_no_fetcher_inserts_marker(self, logo_answers):
        async def run_test():
            return await LogoResolver().resolve("{{logoInmobiliaria}}", logo_answers)

        text, report = asyncio.run(run_test())

        assert text == LOGO_ERROR_MARKER
        assert report.logo_status is LogoStatus.FAILED

    @pytest.mark.parametrize("flag", ["no", "", None])
    def test_not_requested_removes_placeholders(self, fetcher, logo_url, flag):
        answers = AnswerMap({"deseaLogoInmobiliaria": flag, "logoInmobiliaria": logo_url})
        resolver = LogoResolver(fetcher)

        async def run_test():
            return await resolver.resolve(
                "A{{deseaLogoInmobiliaria}}{{logoInmobiliaria}}B", answers
            )

        text, report = asyncio.run(run_test())

        assert text == "AB"
        assert report.logo_status is LogoStatus.NOT_REQUESTED
        assert fetcher.calls == []

    def test_missing_placeholder_reported(self, fetcher, logo_answers):
        resolver = LogoResolver(fetcher)

        async def run_test():
            return await resolver.resolve("Sin logo", logo_answers)

        text, report = asyncio.run(run_test())

        assert text == "Sin logo"
        assert report.logo_status is LogoStatus.PLACEHOLDER_MISSING
        assert fetcher.calls == []

"""End-to-end tests for SpecAnalyzer with mocked HTTP."""

import json
from typing import Any, AsyncGenerator

import pytest
from aioresponses import aioresponses

from specalyzer.analyzer import SpecAnalyzer
from specalyzer.config import AnalyzerSettings
from specalyzer.exceptions import FetchError, ManifestError, UnsupportedRepositoryError
from specalyzer.models import StructuredSource, UrlSource

SITE = "https://example.com/spec"
INDEX = f"{SITE}/index.html"
PDF = f"{SITE}/index.pdf"
VERSIONS = f"{SITE}/versions/"
MAIN = "https://raw.githubusercontent.com/foo/bar/main/package.json"
MASTER = "https://raw.githubusercontent.com/foo/bar/master/package.json"


def _html_with_source(source: Any) -> str:
    return (
        "<html><head><script>"
        f"window.specConfig = {{ specs: [], source: {json.dumps(source)} }};"
        "</script></head><body></body></html>"
    )


@pytest.fixture
async def analyzer() -> AsyncGenerator[SpecAnalyzer, None]:
    """Return an analyzer with a short version probe."""
    settings = AnalyzerSettings(max_numbered_version=3, literal_version_tags=())
    analyzer = SpecAnalyzer(settings=settings)
    yield analyzer
    await analyzer.close()


class TestAnalyze:
    """Test suite for SpecAnalyzer.analyze."""

    @pytest.mark.asyncio
    async def test_structured_source_falls_back_to_master(
        self, analyzer: SpecAnalyzer, spec_config_html: str, spec_up_t_manifest
    ) -> None:
        """Test the full pipeline when main has no package.json."""
        with aioresponses() as m:
            m.get(
                INDEX,
                body=spec_config_html,
                headers={"Last-Modified": "Wed, 01 May 2024 10:00:00 GMT"},
            )
            m.head(PDF, status=200)
            m.get(MAIN, status=404)
            m.get(MASTER, payload=spec_up_t_manifest)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.error is None
        assert result.source == StructuredSource(host="github", account="foo", repo="bar")
        assert result.repo == "https://github.com/foo/bar"
        assert result.pdf_exists is True
        assert result.manifest_url == MASTER
        assert result.manifest_error is None
        assert result.classification.is_spec_up_t is True
        assert result.classification.version == "^1.0.8"
        assert result.version_archive.exists is False
        assert result.last_modified is not None
        assert result.last_modified.year == 2024

    @pytest.mark.asyncio
    async def test_url_source(self, analyzer: SpecAnalyzer, spec_up_manifest) -> None:
        """Test that a plain URL source is used as the repository."""
        with aioresponses() as m:
            m.get(INDEX, body=_html_with_source("https://github.com/foo/bar"))
            m.head(PDF, status=404)
            m.get(MAIN, payload=spec_up_manifest)
            m.head(VERSIONS, status=200)
            m.head(f"{VERSIONS}v1/", status=200)
            m.head(f"{VERSIONS}v2/", status=404)
            m.head(f"{VERSIONS}v3/", status=404)

            result = await analyzer.analyze(SITE)

        assert result.source == UrlSource(url="https://github.com/foo/bar")
        assert result.pdf_exists is False
        assert result.classification.is_spec_up_t is False
        assert result.classification.version == "0.10.6"
        assert result.version_archive.versions == ["v1"]

    @pytest.mark.asyncio
    async def test_github_url_skips_index_fetch(
        self, analyzer: SpecAnalyzer, spec_up_t_manifest
    ) -> None:
        """Test that a GitHub URL is used as the repository without fetching."""
        repo = "https://github.com/foo/bar"
        with aioresponses() as m:
            m.head(f"{repo}/index.pdf", status=404)
            m.get(MAIN, payload=spec_up_t_manifest)
            m.head(f"{repo}/versions/", status=404)

            result = await analyzer.analyze(repo)

            requested = [str(url) for _, url in m.requests]
        assert f"{repo}/index.html" not in requested
        assert result.repo == repo
        assert result.source is None
        assert result.classification.version == "^1.0.8"

    @pytest.mark.asyncio
    async def test_index_failure_falls_back_to_url(self, analyzer: SpecAnalyzer) -> None:
        """Test that an unreachable index.html is not fatal."""
        with aioresponses() as m:
            m.get(INDEX, status=500)
            m.head(PDF, status=404)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.error is None
        assert result.repo == SITE
        assert isinstance(result.manifest_error, UnsupportedRepositoryError)
        assert result.classification.is_spec_up_t is True
        assert result.classification.version is None

    @pytest.mark.asyncio
    async def test_page_without_config(self, analyzer: SpecAnalyzer) -> None:
        """Test that a page without specConfig uses the site URL."""
        with aioresponses() as m:
            m.get(INDEX, body="<html><body>Hello</body></html>")
            m.head(PDF, status=404)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.source is None
        assert result.repo == SITE

    @pytest.mark.asyncio
    async def test_non_github_source(self, analyzer: SpecAnalyzer) -> None:
        """Test that a GitLab source cannot be classified from package.json."""
        source = {"host": "gitlab", "account": "foo", "repo": "bar"}
        with aioresponses() as m:
            m.get(INDEX, body=_html_with_source(source))
            m.head(PDF, status=404)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.repo == SITE
        assert isinstance(result.manifest_error, UnsupportedRepositoryError)
        assert result.error is None

    @pytest.mark.asyncio
    async def test_manifest_missing_on_both_branches(
        self, analyzer: SpecAnalyzer, spec_config_html: str
    ) -> None:
        """Test that only the last manifest error is kept."""
        with aioresponses() as m:
            m.get(INDEX, body=spec_config_html)
            m.head(PDF, status=404)
            m.get(MAIN, status=404)
            m.get(MASTER, status=403)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert isinstance(result.manifest_error, ManifestError)
        assert result.manifest_error.status == 403
        assert result.manifest_url is None
        assert result.classification.is_spec_up_t is True
        assert result.classification.version is None

    @pytest.mark.asyncio
    async def test_pdf_error_is_recorded(
        self, analyzer: SpecAnalyzer, spec_config_html: str, spec_up_t_manifest
    ) -> None:
        """Test that a failing PDF check does not stop the analysis."""
        with aioresponses() as m:
            m.get(INDEX, body=spec_config_html)
            m.head(PDF, status=500, reason="Internal Server Error")
            m.get(MAIN, payload=spec_up_t_manifest)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.pdf_exists is False
        assert isinstance(result.pdf_error, FetchError)
        assert "Unexpected status code: 500" in str(result.pdf_error)
        assert result.classification.version == "^1.0.8"
        assert result.error is None


    @pytest.mark.asyncio
    async def test_undecodable_main_manifest_falls_back_to_master(
        self, analyzer: SpecAnalyzer, spec_config_html: str, spec_up_t_manifest
    ) -> None:
        """Test that a main manifest that is not UTF-8 does not abort the run."""
        with aioresponses() as m:
            m.get(INDEX, body=spec_config_html)
            m.head(PDF, status=404)
            m.get(
                MAIN,
                body=b'{"name": "\xff\xfe"}',
                content_type="text/plain; charset=utf-8",
            )
            m.get(MASTER, payload=spec_up_t_manifest)
            m.head(VERSIONS, status=200)
            m.head(f"{VERSIONS}v1/", status=404)
            m.head(f"{VERSIONS}v2/", status=404)

            result = await analyzer.analyze(SITE)

        assert result.error is None
        assert result.manifest_url == MASTER
        assert result.manifest_error is None
        assert result.classification.version == "^1.0.8"
        assert result.version_archive.exists is True

    @pytest.mark.asyncio
    async def test_undecodable_index_keeps_other_checks(
        self, analyzer: SpecAnalyzer
    ) -> None:
        """Test that a page with bytes outside its charset is still analysed."""
        with aioresponses() as m:
            m.get(
                INDEX,
                body=b"<html>\xe9</html>",
                content_type="text/html; charset=utf-8",
            )
            m.head(PDF, status=200)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.error is None
        assert result.pdf_exists is True
        assert result.repo == SITE

    @pytest.mark.asyncio
    async def test_repository_url_is_canonicalized(
        self, analyzer: SpecAnalyzer, spec_up_t_manifest
    ) -> None:
        """Test that a .git source URL is reported in canonical form."""
        source = "https://github.com/foo/bar.git"
        with aioresponses() as m:
            m.get(INDEX, body=_html_with_source(source))
            m.head(PDF, status=404)
            m.get(MAIN, payload=spec_up_t_manifest)
            m.head(VERSIONS, status=404)

            result = await analyzer.analyze(SITE)

        assert result.source == UrlSource(url=source)
        assert result.repo == "https://github.com/foo/bar"
        assert result.manifest_url == MAIN

    @pytest.mark.asyncio
    async def test_github_input_url_is_canonicalized(
        self, analyzer: SpecAnalyzer, spec_up_t_manifest
    ) -> None:
        """Test that a GitHub input URL with extra path segments is trimmed."""
        url = "https://github.com/foo/bar/tree/main/spec"
        with aioresponses() as m:
            m.head(f"{url}/index.pdf", status=404)
            m.get(MAIN, payload=spec_up_t_manifest)
            m.head(f"{url}/versions/", status=404)

            result = await analyzer.analyze(url)

        assert result.repo == "https://github.com/foo/bar"
        assert result.error is None


@pytest.mark.asyncio
async def test_unexpected_error_is_stored(mocker, spec_config_html: str) -> None:
    """Test that an unexpected failure ends up in result.error."""
    analyzer = SpecAnalyzer()
    mocker.patch.object(
        analyzer.classifier, "classify", side_effect=RuntimeError("boom")
    )
    try:
        with aioresponses() as m:
            m.get(INDEX, body=spec_config_html)
            m.head(PDF, status=200)
            m.get(MAIN, payload={"name": "x"})

            result = await analyzer.analyze(SITE)
    finally:
        await analyzer.close()

    assert isinstance(result.error, RuntimeError)
    assert result.succeeded is False
    assert result.repo == "https://github.com/foo/bar"
    assert result.pdf_exists is True


@pytest.mark.asyncio
async def test_context_manager_closes_fetchers(mocker) -> None:
    """Test that leaving the context closes both fetchers."""
    analyzer = SpecAnalyzer()
    site_close = mocker.patch.object(analyzer.site_fetcher, "close")
    manifest_close = mocker.patch.object(analyzer.manifest_fetcher, "close")

    async with analyzer:
        pass

    site_close.assert_awaited_once()
    manifest_close.assert_awaited_once()

"""Tests for the console reporter."""

import io
from datetime import datetime, timezone

import pytest
from rich.console import Console

from specalyzer.exceptions import FetchError, ManifestError
from specalyzer.models import AnalysisResult, ClassificationResult, VersionArchive
from specalyzer.reporters.console import RULE, ConsoleReporter


def _plain(markup: str) -> str:
    """Render rich markup to plain text."""
    buffer = io.StringIO()
    Console(file=buffer, color_system=None, width=200).print(markup)
    return buffer.getvalue()


@pytest.fixture
def reporter():
    """Create a ConsoleReporter instance."""
    return ConsoleReporter()


@pytest.fixture
def result():
    """Return a successful spec-up-t analysis."""
    return AnalysisResult(
        url="https://example.com/spec",
        repo="https://github.com/foo/bar",
        pdf_exists=True,
        classification=ClassificationResult(is_spec_up_t=True, version="^1.0.8"),
        version_archive=VersionArchive(exists=True, versions=["v1", "v2"]),
    )


def test_render_successful_result(reporter, result):
    output = _plain(reporter.render(result))

    assert output.count(RULE) == 3
    assert "Specalyzer Report" in output
    assert "[Repository]" in output
    assert "https://github.com/foo/bar" in output
    assert "[PDF] index.pdf exists" in output
    assert "[spec-up-t] version in package.json: ^1.0.8" in output
    assert "[Versions] Versions directory exists with 2 versions: v1, v2" in output
    assert "[ERROR]" not in output


def test_render_missing_pdf_and_versions(reporter):
    output = _plain(reporter.render(AnalysisResult(url="https://example.com")))

    assert "index.pdf does NOT exist" in output
    assert "[spec-up-t] is not listed as a dependency in package.json" in output
    assert "[Versions] No versions directory found." in output
    assert "https://example.com" in output


def test_render_spec_up(reporter):
    known = AnalysisResult(
        url="https://example.com",
        classification=ClassificationResult(is_spec_up_t=False, version="0.10.6"),
    )
    unknown = AnalysisResult(
        url="https://example.com",
        classification=ClassificationResult(is_spec_up_t=False),
    )

    assert "[spec-up] built with spec-up, version: 0.10.6" in _plain(
        reporter.render(known)
    )
    assert "version could not be determined" in _plain(reporter.render(unknown))


def test_render_errors(reporter):
    result = AnalysisResult(
        url="https://example.com",
        pdf_error=FetchError("https://example.com/index.pdf", "Timeout when checking for PDF"),
        manifest_error=ManifestError("https://raw.example/package.json", "HTTP Error: 404"),
        version_archive=VersionArchive(error="connection reset"),
        error=RuntimeError("boom [bold]"),
    )
    output = _plain(reporter.render(result))

    assert "Error checking for index.pdf: Timeout when checking for PDF" in output
    assert "[package.json] Could not read package.json: HTTP Error: 404" in output
    assert "Error checking versions: connection reset" in output
    assert "[ERROR] boom [bold]" in output


def test_render_unreadable_manifest(reporter):
    result = AnalysisResult(
        url="https://example.com",
        manifest_error=ManifestError("https://raw.example/package.json", "HTTP Error: 404"),
    )
    output = _plain(reporter.render(result))

    assert "[Build tool] could not be determined, version unknown" in output
    assert "is not listed as a dependency" not in output
    assert "[spec-up-t]" not in output


def test_render_single_version(reporter):
    result = AnalysisResult(
        url="https://example.com",
        version_archive=VersionArchive(exists=True, versions=["latest"]),
    )
    assert "with 1 version: latest" in _plain(reporter.render(result))


def test_render_last_modified(reporter):
    result = AnalysisResult(
        url="https://example.com",
        last_modified=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
    )
    assert "[Last-Modified] 2024-05-01T10:00:00+00:00" in _plain(reporter.render(result))


def test_error_line(reporter):
    assert _plain(reporter.error("Usage: specalyzer <url>")).strip() == (
        "[ERROR] Usage: specalyzer <url>"
    )


def test_format_name(reporter):
    assert reporter.format_name == "console"

"""Command-line interface for specalyzer.

Provides the ``specalyzer`` entry point, which analyses a deployed
specification and prints the result to the console or writes an HTML
report.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from specalyzer import __version__
from specalyzer.analyzer import SpecAnalyzer
from specalyzer.config import AnalyzerSettings, ReportSettings
from specalyzer.models import AnalysisResult
from specalyzer.reporters import ConsoleReporter, HtmlReporter
from specalyzer.urls import normalize_url

app = typer.Typer(
    name="specalyzer",
    help="Analyze specifications built with Spec-Up or Spec-Up-T.",
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("specalyzer")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("specalyzer").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"specalyzer {__version__}")
        raise typer.Exit()


async def _analyze(url: str, settings: AnalyzerSettings) -> AnalysisResult:
    """Run one analysis with fresh fetchers.

    Args:
        url: Normalized site URL.
        settings: Analyzer settings.

    Returns:
        The analysis result.
    """
    async with SpecAnalyzer(settings=settings) as analyzer:
        return await analyzer.analyze(url)


def _report_console(result: AnalysisResult, report_settings: ReportSettings) -> int:
    reporter = ConsoleReporter(report_settings)
    console.print(reporter.render(result))
    return 0 if result.succeeded else 1


def _report_html(
    url: str,
    settings: AnalyzerSettings,
    report_settings: ReportSettings,
    open_report: bool,
) -> int:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Analyzing {url}...", total=None)
        result = asyncio.run(_analyze(url, settings))
        progress.update(task, completed=True)

    reporter = HtmlReporter(report_settings)
    try:
        path = reporter.save(result)
    except OSError as e:
        err_console.print(f"[red]Error writing report:[/red] {e}")
        return 1

    console.print(f"[green]Report saved to:[/green] {path}")
    if open_report:
        reporter.open(path)

    return 0 if result.succeeded else 1


@app.command()
def main(
    url: Annotated[
        Optional[str],
        typer.Argument(help="URL or bare domain of the deployed specification"),
    ] = None,
    html: Annotated[
        bool,
        typer.Option(
            "--html",
            help="Write an HTML report instead of printing to the console",
        ),
    ] = False,
    reports_dir: Annotated[
        Path,
        typer.Option(
            "--reports-dir",
            help="Directory for generated HTML reports",
        ),
    ] = Path("reports"),
    no_open: Annotated[
        bool,
        typer.Option(
            "--no-open",
            help="Do not open the HTML report in a browser",
        ),
    ] = False,
    github_token: Annotated[
        Optional[str],
        typer.Option(
            "--github-token",
            envvar="GITHUB_TOKEN",
            help="GitHub token for reading package.json of private repositories",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the specalyzer version and exit",
        ),
    ] = None,
) -> None:
    """Analyze a Spec-Up or Spec-Up-T specification site.

    Finds the source repository, reads its package.json to tell which
    build tool (and version) produced the site, and checks for a PDF and
    archived versions.

    Exit codes:
        0 - Analysis completed
        1 - Missing URL or analysis failed
    """
    _setup_logging(verbose)

    if not url:
        err_console.print("[red]Error:[/red] Usage: specalyzer <url>")
        raise typer.Exit(code=1)

    normalized_url = normalize_url(url)
    settings = AnalyzerSettings(github_token=github_token)
    report_settings = ReportSettings(tool_version=__version__, reports_dir=reports_dir)

    try:
        if html:
            exit_code = _report_html(
                normalized_url, settings, report_settings, open_report=not no_open
            )
        else:
            console.print(f"Normalized URL: {normalized_url}")
            result = asyncio.run(_analyze(normalized_url, settings))
            exit_code = _report_console(result, report_settings)
    except Exception as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()

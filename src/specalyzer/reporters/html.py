"""HTML reporter for generating standalone analysis reports.

This module renders an analysis result into a self-contained HTML page
using the bundled Jinja2 template, saves it to the reports directory and
opens it in the default browser.
"""

import logging
from datetime import datetime, timezone
from importlib.resources import files
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import typer
from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from specalyzer.config import ReportSettings
from specalyzer.models import AnalysisResult
from specalyzer.reporters.base import BaseReporter
from specalyzer.urls import parse_github_url

logger = logging.getLogger(__name__)


def report_filename(url: str, now: Optional[datetime] = None) -> str:
    """Build a collision-free report file name for an analysed URL.

    Args:
        url: The analysed URL.
        now: Timestamp to embed. Defaults to the current UTC time.

    Returns:
        A name like ``example_com_report_2024-05-01T10-20-30.html``.
    """
    now = now or datetime.now(timezone.utc)
    host = urlparse(url).hostname or "report"
    return f"{host.replace('.', '_')}_report_{now.strftime('%Y-%m-%dT%H-%M-%S')}.html"


class HtmlReporter(BaseReporter):
    """Reporter that generates an HTML report page.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        template_path: Optional[Path] = None,
    ) -> None:
        """Initialize the HTML reporter.

        Args:
            settings: Optional presentation settings.
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.
        """
        super().__init__(settings)
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=select_autoescape(default=True),
            )
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template.

        Returns:
            The default template loaded from package resources.
        """
        template_content = (
            files("specalyzer.templates")
            .joinpath("report.html.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=True)
        return env.from_string(template_content)

    def render(
        self, result: AnalysisResult, generated_at: Optional[datetime] = None
    ) -> str:
        """Render an analysis result to HTML.

        Args:
            result: The analysis result.
            generated_at: Timestamp shown in the header. Defaults to now.

        Returns:
            Rendered HTML document as a string.
        """
        generated_at = generated_at or datetime.now()
        repo = result.repo
        github = parse_github_url(repo) if repo else None

        return self.template.render(
            title=self.settings.title,
            tool_version=self.settings.tool_version,
            result=result,
            repo=repo,
            github_path="/".join(github) if github else None,
            generated_at=generated_at,
            year=generated_at.year,
        )

    def save(self, result: AnalysisResult) -> Path:
        """Render and save the report into the reports directory.

        The directory is created if it does not exist.

        Args:
            result: The analysis result.

        Returns:
            Path of the written report.
        """
        reports_dir = self.settings.reports_dir
        reports_dir.mkdir(parents=True, exist_ok=True)
        output_path = reports_dir / report_filename(result.url)
        self.write(result, output_path)
        logger.info("Report saved to: %s", output_path)
        return output_path

    def open(self, path: Path) -> bool:
        """Open a saved report in the default browser.

        Args:
            path: Report file.

        Returns:
            True if the browser launcher reported success.
        """
        exit_code = typer.launch(str(path.resolve()))
        if exit_code != 0:
            logger.warning("Could not open report in browser: %s", path)
            return False
        return True

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "html".
        """
        return "html"

"""Runtime settings for analysis and reporting.

Settings are plain frozen dataclasses built once by the CLI and passed
explicitly to the analyzer and the reporters.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_PALETTE = {
    "error": "red",
    "info": "blue",
    "success": "green",
    "warning": "yellow",
    "rule": "cyan",
}


@dataclass(frozen=True)
class AnalyzerSettings:
    """Tunables for the fetchers, the probe and the classifier.

    Attributes:
        probe_timeout: Seconds before a PDF or directory probe gives up.
        min_typical_matches: Number of characteristic spec-up dependencies
            that must be present for the dependency fingerprint to match.
        max_numbered_version: Highest ``vN`` directory probed.
        max_consecutive_misses: Numbered probing stops after this many
            missing directories in a row.
        literal_version_tags: Named version directories probed after the
            numbered ones.
        manifest_branches: Branches tried, in order, for package.json.
        max_redirects: Redirect hops followed by the PDF check.
        github_token: Optional token sent to raw.githubusercontent.com.
    """

    probe_timeout: float = 10.0
    min_typical_matches: int = 10
    max_numbered_version: int = 20
    max_consecutive_misses: int = 2
    literal_version_tags: tuple[str, ...] = ("latest", "stable", "current", "draft")
    manifest_branches: tuple[str, ...] = ("main", "master")
    max_redirects: int = 5
    github_token: Optional[str] = None


@dataclass(frozen=True)
class ReportSettings:
    """Presentation settings for the console and HTML reporters.

    Attributes:
        title: Report heading.
        tool_version: Version of specalyzer shown in report footers.
        reports_dir: Directory that receives generated HTML reports.
        palette: Rich style per message level.
    """

    title: str = "Specalyzer Report"
    tool_version: str = "unknown"
    reports_dir: Path = Path("reports")
    palette: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))

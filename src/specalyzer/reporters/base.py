"""Base interface for output reporters.

Reporters generate formatted output (console text, HTML) from an
analysis result.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from specalyzer.config import ReportSettings
from specalyzer.models import AnalysisResult


class BaseReporter(ABC):
    """Abstract base class for output reporters.

    Attributes:
        settings: Presentation settings.
    """

    def __init__(self, settings: Optional[ReportSettings] = None) -> None:
        """Initialize the reporter.

        Args:
            settings: Optional presentation settings. Defaults are used if
                omitted.
        """
        self.settings = settings or ReportSettings()

    @abstractmethod
    def render(self, result: AnalysisResult) -> str:
        """Render an analysis result to formatted output.

        Args:
            result: The analysis result.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, result: AnalysisResult, output_path: Path) -> None:
        """Render and write output to a file.

        Args:
            result: The analysis result.
            output_path: Path to write the output file.
        """
        content = self.render(result)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "console", "html", etc.
        """
        ...

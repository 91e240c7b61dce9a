"""Output reporters for analysis results.

This module provides reporters for rendering an analysis result to the
console or to a standalone HTML report.
"""

from specalyzer.reporters.base import BaseReporter
from specalyzer.reporters.console import ConsoleReporter
from specalyzer.reporters.html import HtmlReporter

__all__ = ["BaseReporter", "ConsoleReporter", "HtmlReporter"]

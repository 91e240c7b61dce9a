"""Console reporter producing labelled, colored lines.

Output is rich markup; print it with a ``rich.console.Console``.
"""

from rich.markup import escape

from specalyzer.models import AnalysisResult
from specalyzer.reporters.base import BaseReporter

RULE = "=============================="


class ConsoleReporter(BaseReporter):
    """Reporter that renders an analysis result as console markup."""

    def _line(self, level: str, label: str, message: str) -> str:
        style = self.settings.palette.get(level, "default")
        return f"[{style}]{escape(f'[{label}]')}[/{style}] {message}"

    def header(self) -> str:
        """Return the framed report header."""
        rule_style = self.settings.palette.get("rule", "cyan")
        return (
            f"\n[{rule_style}]{RULE}[/{rule_style}]\n"
            f"[bold]{escape(self.settings.title)}[/bold]\n"
            f"[{rule_style}]{RULE}[/{rule_style}]\n"
        )

    def footer(self) -> str:
        """Return the closing rule."""
        rule_style = self.settings.palette.get("rule", "cyan")
        return f"\n[{rule_style}]{RULE}[/{rule_style}]\n"

    def error(self, message: str) -> str:
        """Return a formatted error line."""
        return self._line("error", "ERROR", escape(message))

    def render(self, result: AnalysisResult) -> str:
        """Render an analysis result as console markup.

        Args:
            result: The analysis result.

        Returns:
            Rich markup, one labelled line per check.
        """
        lines = [self.header()]

        lines.append(self._line("warning", "Repository", ""))
        lines.append("  " + escape(result.repo or result.url))

        if result.pdf_error is not None:
            lines.append(
                self._line(
                    "warning",
                    "PDF",
                    escape(f"Error checking for index.pdf: {result.pdf_error}"),
                )
            )
        elif result.pdf_exists:
            lines.append(self._line("success", "PDF", "index.pdf exists"))
        else:
            lines.append(self._line("warning", "PDF", "index.pdf does NOT exist"))

        lines.extend(self._classification_lines(result))
        lines.append(self._versions_line(result))

        if result.last_modified is not None:
            lines.append(
                self._line(
                    "info", "Last-Modified", escape(result.last_modified.isoformat())
                )
            )

        if result.error is not None:
            lines.append(self.error(str(result.error)))

        lines.append(self.footer())
        return "\n".join(lines)

    def _classification_lines(self, result: AnalysisResult) -> list[str]:
        classification = result.classification
        label = classification.tool_name
        lines = []

        if result.manifest_error is not None:
            label = "Build tool"
            message = "could not be determined, version unknown"
        elif classification.is_spec_up_t:
            if classification.version:
                message = (
                    "version in package.json: "
                    f"[bold]{escape(classification.version)}[/bold]"
                )
            else:
                message = "is not listed as a dependency in package.json"
        else:
            if classification.version:
                message = (
                    "built with spec-up, version: "
                    f"[bold]{escape(classification.version)}[/bold]"
                )
            else:
                message = "built with spec-up, version could not be determined"
        lines.append(self._line("info", label, message))

        if result.manifest_error is not None:
            lines.append(
                self._line(
                    "warning",
                    "package.json",
                    escape(f"Could not read package.json: {result.manifest_error}"),
                )
            )
        return lines

    def _versions_line(self, result: AnalysisResult) -> str:
        archive = result.version_archive
        if archive.error:
            return self._line(
                "warning", "Versions", escape(f"Error checking versions: {archive.error}")
            )
        if not archive.exists:
            return self._line("info", "Versions", "No versions directory found.")

        plural = "" if archive.count == 1 else "s"
        names = escape(", ".join(archive.versions))
        return self._line(
            "info",
            "Versions",
            f"Versions directory exists with {archive.count} version{plural}: {names}",
        )

    @property
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            The string "console".
        """
        return "console"

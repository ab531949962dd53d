"""Error reporter for the PDL parser.

Provide rustc-style diagnostic formatting with source context and carets.
"""

from io import StringIO

from pdl.errors.diagnostics import Diagnostic, Severity
from pdl.log import get_logger

logger = get_logger(__name__)

GUTTER_WIDTH = 5
"""Width of the line number gutter."""

CONTEXT_LINES = 1
"""Number of context lines to show before/after error."""


class DiagnosticReporter:
    """Format diagnostic messages.

    Format diagnostics in rustc-style with source context and carets
    pointing to the error location.
    """

    def __init__(self) -> None:
        """Initialize the diagnostic reporter with no sources."""
        self._source_cache: dict[str, str] = {}

    def add_source(self, file_path: str, source: str) -> None:
        """Add source content for a file.

        Args:
            file_path: Path to the source file.
            source: Content of the source file.

        """
        self._source_cache[file_path] = source

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic in rustc-style.

        Args:
            diagnostic: The diagnostic to format.

        Returns:
            Formatted diagnostic string.

        Example output:
            error[E0002]: expected minor
              --> browser_protocol.pdl:7:3
                 |
               6 |   major 1
               7 |   minr 3
                 |   ^^^^
               8 |
                 |

        """
        output = StringIO()

        self._write_header(output, diagnostic)
        self._write_location(output, diagnostic)
        self._write_source_context(output, diagnostic)

        if diagnostic.help_text:
            gutter = " " * GUTTER_WIDTH
            output.write(f"{gutter}= help: {diagnostic.help_text}\n")

        return output.getvalue()

    def format_diagnostics(
        self,
        diagnostics: list[Diagnostic],
        *,
        include_summary: bool = True,
    ) -> str:
        """Format multiple diagnostics.

        Args:
            diagnostics: List of diagnostics to format.
            include_summary: Whether to include a summary line at the end.

        Returns:
            Formatted string with all diagnostics.

        """
        if not diagnostics:
            return ""

        output = StringIO()
        for i, diagnostic in enumerate(diagnostics):
            if i > 0:
                output.write("\n")
            output.write(self.format_diagnostic(diagnostic))

        if include_summary:
            output.write("\n")
            self._write_summary(output, diagnostics)

        return output.getvalue()

    def _write_header(self, output: StringIO, diagnostic: Diagnostic) -> None:
        severity = diagnostic.severity.value
        if diagnostic.code:
            output.write(f"{severity}[{diagnostic.code.value}]: {diagnostic.message}\n")
        else:
            output.write(f"{severity}: {diagnostic.message}\n")

    def _write_location(self, output: StringIO, diagnostic: Diagnostic) -> None:
        # Columns are displayed 1-indexed for users
        col_display = diagnostic.column + 1
        output.write(f"  --> {diagnostic.file}:{diagnostic.line}:{col_display}\n")

    def _write_source_context(
        self,
        output: StringIO,
        diagnostic: Diagnostic,
    ) -> None:
        """Write source context with carets.

        Args:
            output: Output buffer.
            diagnostic: The diagnostic.

        """
        source = self._source_cache.get(diagnostic.file)
        if source is None:
            output.write(f"{' ' * GUTTER_WIDTH}|\n")
            return

        lines = source.split("\n")
        line_idx = diagnostic.line - 1

        if line_idx < 0 or line_idx >= len(lines):
            output.write(f"{' ' * GUTTER_WIDTH}|\n")
            return

        start_idx = max(0, line_idx - CONTEXT_LINES)
        end_idx = min(len(lines), line_idx + CONTEXT_LINES + 1)

        output.write(f"{' ' * GUTTER_WIDTH}|\n")

        for idx in range(start_idx, end_idx):
            line_content = lines[idx]
            gutter = f"{idx + 1:>{GUTTER_WIDTH - 1}} "
            output.write(f"{gutter}| {line_content}\n")

            if idx == line_idx:
                self._write_caret_line(output, diagnostic, line_content)

        output.write(f"{' ' * GUTTER_WIDTH}|\n")

    def _write_caret_line(
        self,
        output: StringIO,
        diagnostic: Diagnostic,
        source_line: str,
    ) -> None:
        span_length = self._guess_span_length(source_line, diagnostic.column)

        # Keep tabs so the carets line up with the source line
        col = diagnostic.column
        prefix = source_line[:col] if col < len(source_line) else source_line
        spacing = "".join("\t" if c == "\t" else " " for c in prefix)

        carets = "^" * span_length
        gutter = " " * GUTTER_WIDTH
        output.write(f"{gutter}| {spacing}{carets}\n")

    def _guess_span_length(self, line: str, column: int) -> int:
        """Guess the span length for highlighting.

        Args:
            line: The source line.
            column: Start column.

        Returns:
            Length of the word starting at column, at least 1.

        """
        if column >= len(line):
            return 1

        end = column
        while end < len(line) and not line[end].isspace():
            end += 1

        return max(1, end - column)

    def _write_summary(
        self,
        output: StringIO,
        diagnostics: list[Diagnostic],
    ) -> None:
        errors = sum(1 for d in diagnostics if d.severity == Severity.ERROR)
        warnings = sum(1 for d in diagnostics if d.severity == Severity.WARNING)

        if errors == 0 and warnings == 0:
            return

        parts = []
        if errors > 0:
            parts.append(f"{errors} error{'s' if errors != 1 else ''}")
        if warnings > 0:
            parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")

        summary = " and ".join(parts)
        files = {d.file for d in diagnostics}
        if len(files) == 1:
            output.write(f"Found {summary} in {next(iter(files))}\n")
        else:
            output.write(f"Found {summary} in {len(files)} files\n")

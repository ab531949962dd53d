"""PDL command line entry point.

Parse a PDL file and write it out as JSON, pretty JSON, Markdown or
canonical PDL text.
"""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from pdl.args import Args, bind_and_run
from pdl.ast.nodes import Document
from pdl.config_loader import load_format_from_config, load_title_from_config
from pdl.errors import Diagnostic, DiagnosticReporter, ErrorCode
from pdl.errors.codes import HELP_TEXTS, format_error_message
from pdl.log import get_logger, init_logging
from pdl.parser import PdlSyntaxError, parse
from pdl.render.markdown import render_markdown
from pdl.render.schema import render_json, render_json_pretty
from pdl.render.text import render_text

logger = get_logger(__name__)

EXIT_SUCCESS = 0
"""Exit code for successful conversion."""

EXIT_PARSE_ERRORS = 1
"""Exit code when the input could not be parsed."""

EXIT_FILE_ERROR = 2
"""Exit code when the input could not be read or the output written."""

REMAINDER_PREVIEW_LIMIT = 1000
"""Maximum number of characters of unparsed content shown in warnings."""

_console = Console(stderr=True)


def normalize_source(source: str) -> str:
    """Normalize source so the last line is terminated.

    Args:
        source: Raw file content.

    Returns:
        Source ending with a newline.

    """
    if source and not source.endswith("\n"):
        return source + "\n"
    return source


def render(document: Document, output_format: str, title: str) -> str:
    """Render a document in the requested output format.

    Args:
        document: Parsed document.
        output_format: One of json, pretty, markdown or text.
        title: Title used by the Markdown format.

    Returns:
        Rendered output.

    """
    if output_format == "pretty":
        return render_json_pretty(document)
    if output_format == "markdown":
        return render_markdown(document, title)
    if output_format == "text":
        return render_text(document)
    return render_json(document)


def _remainder_line(source: str, remainder: str) -> int:
    """Get the 1-based line number at which the remainder starts."""
    return source.count("\n", 0, len(source) - len(remainder)) + 1


def _print_error(message: str) -> None:
    _console.print(f"[red]error[/red]: {escape(message)}", emoji=False, soft_wrap=True)


def _report(reporter: DiagnosticReporter, diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        return
    _console.print(
        reporter.format_diagnostics(diagnostics),
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        end="",
    )


def convert_file(
    file_path: Path,
    *,
    output_format: str,
    title: str,
    out: Path | None = None,
) -> int:
    """Parse a PDL file and write the rendered output.

    Args:
        file_path: PDL file to read.
        output_format: One of json, pretty, markdown or text.
        title: Title used by the Markdown format.
        out: Output file, or None to write to stdout.

    Returns:
        Exit code.

    """
    filename = str(file_path)
    try:
        source = normalize_source(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        _print_error(f"cannot read {filename}: {e}")
        return EXIT_FILE_ERROR

    reporter = DiagnosticReporter()
    reporter.add_source(filename, source)

    try:
        document, remainder = parse(source)
    except PdlSyntaxError as e:
        logger.debug("Failed to parse %s: %s", filename, e)
        _report(reporter, [e.to_diagnostic(filename)])
        return EXIT_PARSE_ERRORS

    diagnostics: list[Diagnostic] = []
    if remainder.strip():
        preview = remainder[:REMAINDER_PREVIEW_LIMIT]
        logger.debug("Unparsed content in %s:\n%s", filename, preview)
        diagnostics.append(
            Diagnostic.warning(
                message=format_error_message(ErrorCode.W0001),
                file=filename,
                line=_remainder_line(source, remainder),
                column=0,
                code=ErrorCode.W0001,
                help_text=HELP_TEXTS[ErrorCode.W0001],
            ),
        )
    _report(reporter, diagnostics)

    output = render(document, output_format, title)
    if not output.endswith("\n"):
        output += "\n"

    if out is None:
        sys.stdout.write(output)
        return EXIT_SUCCESS
    try:
        out.write_text(output, encoding="utf-8")
    except OSError as e:
        _print_error(f"cannot write {out}: {e}")
        return EXIT_FILE_ERROR
    logger.info("Wrote %s output to %s", output_format, out)
    return EXIT_SUCCESS


def run(args: Args) -> None:
    """Configure logging, convert the input file and exit."""
    init_logging(args)
    try:
        output_format = load_format_from_config(args)
    except ValueError as e:
        _print_error(str(e))
        sys.exit(EXIT_FILE_ERROR)

    sys.exit(
        convert_file(
            args.file,
            output_format=output_format,
            title=load_title_from_config(args),
            out=args.out,
        ),
    )


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(run)


if __name__ == "__main__":
    main()

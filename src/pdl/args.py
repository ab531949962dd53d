"""Parse and organize command line args."""

from collections.abc import Callable
from pathlib import Path

import typed_argparse as tap

OUTPUT_FORMATS = ("json", "pretty", "markdown", "text")
"""Output formats accepted by --format."""


class Args(tap.TypedArgs):
    """App args."""

    file: Path = tap.arg(positional=True, help="PDL file to parse")
    format: str | None = tap.arg(
        help=(
            "Output format: json, pretty, markdown or text "
            "(default: from .pdl/config.toml, else json)"
        ),
        default=None,
    )
    out: Path | None = tap.arg(
        help="Output file path (default: stdout)",
        default=None,
    )
    title: str | None = tap.arg(
        help="Title of the Markdown page (default: the input file name)",
        default=None,
    )
    verbose: bool = tap.arg(help="Enables verbose (DEBUG) logging", default=False)

    @property
    def working_dir(self) -> Path:
        """Get working directory."""
        return Path.cwd().resolve()


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    tap.Parser(Args).bind(app_main).run()

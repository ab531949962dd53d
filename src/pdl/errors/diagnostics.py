"""Diagnostic message building for the PDL parser.

Provide diagnostic dataclasses for representing parse errors and warnings
with source location information.
"""

from dataclasses import dataclass
from enum import Enum

from pdl.errors.codes import ErrorCode
from pdl.log import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    """A parse error; no document was produced."""

    WARNING = "warning"
    """A potential issue that did not prevent parsing."""


@dataclass
class Diagnostic:
    """A diagnostic message with source location."""

    severity: Severity
    """The severity level of this diagnostic."""

    message: str
    """The primary diagnostic message (no leading capital, no trailing period)."""

    file: str
    """Path to the source file."""

    line: int
    """Line number where the diagnostic occurs (1-indexed)."""

    column: int
    """Column number where the diagnostic starts (0-indexed)."""

    code: ErrorCode | None = None
    """Optional error code for categorization."""

    help_text: str | None = None
    """Optional help text with suggestions for fixing the issue."""

    @classmethod
    def error(  # noqa: PLR0913
        cls,
        message: str,
        file: str,
        line: int,
        column: int,
        *,
        code: ErrorCode | None = None,
        help_text: str | None = None,
    ) -> "Diagnostic":
        """Create an error diagnostic.

        Args:
            message: The error message.
            file: Source file path.
            line: Line number (1-indexed).
            column: Column number (0-indexed).
            code: Optional error code.
            help_text: Optional help text.

        Returns:
            A new Diagnostic with ERROR severity.

        """
        return cls(
            severity=Severity.ERROR,
            message=message,
            file=file,
            line=line,
            column=column,
            code=code,
            help_text=help_text,
        )

    @classmethod
    def warning(  # noqa: PLR0913
        cls,
        message: str,
        file: str,
        line: int,
        column: int,
        *,
        code: ErrorCode | None = None,
        help_text: str | None = None,
    ) -> "Diagnostic":
        """Create a warning diagnostic.

        Args:
            message: The warning message.
            file: Source file path.
            line: Line number (1-indexed).
            column: Column number (0-indexed).
            code: Optional error code.
            help_text: Optional help text.

        Returns:
            A new Diagnostic with WARNING severity.

        """
        return cls(
            severity=Severity.WARNING,
            message=message,
            file=file,
            line=line,
            column=column,
            code=code,
            help_text=help_text,
        )

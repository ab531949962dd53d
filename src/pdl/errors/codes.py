"""Error code definitions for the PDL parser.

Provide standardized error codes for categorizing parse problems reported
to the user.
"""

from enum import Enum

from pdl.log import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """PDL parser error codes.

    - E00xx: Syntax errors
    - W00xx: Warnings (the document still parsed)
    """

    E0001 = "E0001"
    """Input ended before a construct was complete."""

    E0002 = "E0002"
    """A line did not match the expected production."""

    W0001 = "W0001"
    """Unparsed content follows the last recognised domain."""


# Error message templates for each code
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E0001: "unexpected end of input while parsing {expected}",
    ErrorCode.E0002: "expected {expected}",
    ErrorCode.W0001: "unparsed content after the last domain",
}

# Help shown below the source context of a diagnostic
HELP_TEXTS: dict[ErrorCode, str] = {
    ErrorCode.E0001: "parse with final=True once the whole document is available",
    ErrorCode.E0002: "check the keyword and indentation of this line",
    ErrorCode.W0001: "everything from here to the end of the input was ignored",
}


def format_error_message(code: ErrorCode, **kwargs: str) -> str:
    """Format an error message with the given parameters.

    Args:
        code: The error code.
        **kwargs: Parameters to substitute in the message template.

    Returns:
        Formatted error message string.

    """
    template = ERROR_MESSAGES.get(code, "unknown error")
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter for error message: %s", e)
        return template

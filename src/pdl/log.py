"""Logging helper module."""

from logging import (
    DEBUG,
    INFO,
    Formatter,
    Logger,
    StreamHandler,
    getLogger,
)

from pdl.args import Args


def init_logging(args: Args) -> None:
    """Initialize logging for the command line tool.

    Should be called once when the application starts.
    """
    # Console handler for user-facing logs, stderr keeps stdout clean for output
    console_handler = StreamHandler()
    console_handler.setFormatter(Formatter("%(levelname)s: %(message)s"))

    root_logger = getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    configure_3p_loggers(root_logger)

    if args.verbose:
        root_logger.setLevel(DEBUG)
        console_handler.setLevel(DEBUG)
        root_logger.debug("Debug logging enabled.")
    else:
        root_logger.setLevel(INFO)
        console_handler.setLevel(INFO)


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)


def configure_3p_loggers(root_logger: Logger) -> None:
    """Make third-party loggers propagate to the root handlers only."""
    for name in root_logger.manager.loggerDict:
        if name.startswith("pdl"):
            continue  # Skip our own loggers
        third_party_logger = getLogger(name)
        third_party_logger.handlers.clear()

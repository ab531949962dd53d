"""Configuration loader for the PDL tool."""

import tomllib
from pathlib import Path
from typing import Any

from pdl.args import OUTPUT_FORMATS, Args
from pdl.log import get_logger

logger = get_logger(__name__)

CONFIG_DIR = ".pdl"
CONFIG_FILE = "config.toml"

DEFAULT_FORMAT = "json"
"""Output format used when neither the command line nor a config sets one."""


def _read_config(config_path: Path) -> dict[str, Any]:
    """Read a TOML config file, returning an empty config if unusable."""
    if not config_path.exists():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Failed to load config %s: %s", config_path, e)
        return {}


def _config_value(args: Args, key: str) -> str | None:
    """Look up a config value: local config first, then global."""
    for config_path in (
        args.working_dir / CONFIG_DIR / CONFIG_FILE,
        Path.home() / CONFIG_DIR / CONFIG_FILE,
    ):
        config = _read_config(config_path)
        if key in config:
            value = config[key]
            return str(value) if value is not None else None
    return None


def load_format_from_config(args: Args) -> str:
    """Load the output format with priority: CLI > local > global > default.

    Args:
        args: Parsed command line arguments

    Returns:
        Output format name.

    Raises:
        ValueError: If the resolved format is not a known output format.

    """
    output_format = args.format or _config_value(args, "format") or DEFAULT_FORMAT
    if output_format not in OUTPUT_FORMATS:
        msg = (
            f"Unknown output format '{output_format}', "
            f"expected one of: {', '.join(OUTPUT_FORMATS)}"
        )
        raise ValueError(msg)
    return output_format


def load_title_from_config(args: Args) -> str:
    """Load the Markdown title with priority: CLI > local > global > file stem.

    Args:
        args: Parsed command line arguments

    Returns:
        Page title.

    """
    return args.title or _config_value(args, "title") or args.file.stem

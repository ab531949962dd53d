"""Parser factory for the PDL line grammar.

Create a configured Lark LALR parser exposing one start rule per line
production of the Protocol Definition Language.
"""

from pathlib import Path

from lark import Lark

from pdl.log import get_logger

logger = get_logger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "pdl.lark"
"""Path to the PDL line grammar file."""

LINE_RULES: tuple[str, ...] = (
    "comment",
    "version",
    "major",
    "minor",
    "domain",
    "depends_on",
    "type_def",
    "enum_item",
    "properties_item",
    "variant",
    "command",
    "event",
    "redirect",
    "parameters",
    "returns",
    "param",
)
"""Start rules of the grammar, each matching one whole line."""


class ParserFactory:
    """Factory for PDL line parser instances.

    The parser is cached because LALR table construction is the expensive
    part and the resulting parser holds no per-parse state.
    """

    _grammar_cache: str | None = None
    """Cached grammar content to avoid repeated file reads."""

    _parser_cache: Lark | None = None
    """Cached parser instance."""

    @classmethod
    def _load_grammar(cls) -> str:
        """Load the grammar file contents.

        Returns:
            The grammar string.

        """
        if cls._grammar_cache is None:
            logger.debug("Loading grammar from %s", GRAMMAR_PATH)
            cls._grammar_cache = GRAMMAR_PATH.read_text()
        return cls._grammar_cache

    @classmethod
    def create(cls) -> Lark:
        """Create (or reuse) the PDL line parser.

        Returns:
            Lark parser; pass ``start=<rule>`` to ``parse`` to pick the line
            production to match.

        """
        if cls._parser_cache is not None:
            return cls._parser_cache

        logger.debug("Creating lalr parser with %d start rules", len(LINE_RULES))
        cls._parser_cache = Lark(
            cls._load_grammar(),
            parser="lalr",
            lexer="contextual",
            start=list(LINE_RULES),
            maybe_placeholders=True,
            keep_all_tokens=False,
        )
        return cls._parser_cache

    @classmethod
    def clear_cache(cls) -> None:
        """Clear all cached parser state.

        Use for testing or when grammar may have changed.
        """
        cls._grammar_cache = None
        cls._parser_cache = None

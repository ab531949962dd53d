"""Grammar package for PDL.

Provide the Lark line grammar and the parser factory used by the
block-level protocol parser.
"""

from pdl.grammar.parser import LINE_RULES, ParserFactory

__all__ = ["LINE_RULES", "ParserFactory"]

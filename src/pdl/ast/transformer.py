"""Line transformer for PDL.

Transform Lark parse trees of single PDL lines into model values.
"""

# mypy: disable-error-code="type-arg"
# Note: Lark transformers receive heterogeneous children, making strict typing
# impractical. The type-arg error is suppressed for this file.

from dataclasses import dataclass

from lark import Token, Transformer, Tree, v_args

from pdl.ast.nodes import ArrayType, Type, type_from_word
from pdl.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeclarationHead:
    """Head line of a declaration: modifiers, name and optional type."""

    name: str
    experimental: bool = False
    deprecated: bool = False
    optional: bool = False
    ty: Type | None = None
    """Type after ``extends`` for type definitions, the type of a parameter."""


def _flag(token: Token | None) -> bool:
    """Check a positional modifier, which is a None placeholder when absent."""
    return token is not None


@v_args(inline=True)
class LineTransformer(Transformer):
    """Transform a single-line parse tree into a model value.

    Keyword-only lines (``version``, ``enum``, ``properties``, ``parameters``,
    ``returns``) transform into their keyword so that every successful match
    yields a non-None value.
    """

    # =========================================================================
    # Comments and version block
    # =========================================================================

    def comment(self, _indent: Token | None, text: Token | None) -> str:
        """Transform comment rule."""
        return str(text).strip() if text is not None else ""

    def version(self) -> str:
        """Transform version rule."""
        return "version"

    def major(self, _indent: Token, digits: Token) -> int:
        """Transform major rule."""
        return int(digits)

    def minor(self, _indent: Token, digits: Token) -> int:
        """Transform minor rule."""
        return int(digits)

    # =========================================================================
    # Domains and type definitions
    # =========================================================================

    def domain(
        self,
        experimental: Token | None,
        deprecated: Token | None,
        name: Token,
    ) -> DeclarationHead:
        """Transform domain rule."""
        return DeclarationHead(
            name=str(name),
            experimental=_flag(experimental),
            deprecated=_flag(deprecated),
        )

    def depends_on(self, _indent: Token, name: Token) -> str:
        """Transform depends_on rule."""
        return str(name)

    def type_def(  # noqa: PLR0913
        self,
        _indent: Token,
        experimental: Token | None,
        deprecated: Token | None,
        optional: Token | None,
        type_id: Token,
        extends: Type,
    ) -> DeclarationHead:
        """Transform type_def rule."""
        return DeclarationHead(
            name=str(type_id),
            experimental=_flag(experimental),
            deprecated=_flag(deprecated),
            optional=_flag(optional),
            ty=extends,
        )

    def enum_item(self, _indent: Token) -> str:
        """Transform enum_item rule."""
        return "enum"

    def properties_item(self, _indent: Token) -> str:
        """Transform properties_item rule."""
        return "properties"

    def variant(self, _indent: Token, name: Token) -> str:
        """Transform variant rule."""
        return str(name)

    # =========================================================================
    # Commands and events
    # =========================================================================

    def command(
        self,
        _indent: Token,
        experimental: Token | None,
        deprecated: Token | None,
        name: Token,
    ) -> DeclarationHead:
        """Transform command rule."""
        return DeclarationHead(
            name=str(name),
            experimental=_flag(experimental),
            deprecated=_flag(deprecated),
        )

    def event(
        self,
        _indent: Token,
        experimental: Token | None,
        deprecated: Token | None,
        name: Token,
    ) -> DeclarationHead:
        """Transform event rule."""
        return DeclarationHead(
            name=str(name),
            experimental=_flag(experimental),
            deprecated=_flag(deprecated),
        )

    def redirect(self, _indent: Token, to: Token) -> str:
        """Transform redirect rule."""
        return str(to)

    def parameters(self, _indent: Token) -> str:
        """Transform parameters rule."""
        return "parameters"

    def returns(self, _indent: Token) -> str:
        """Transform returns rule."""
        return "returns"

    def param(  # noqa: PLR0913
        self,
        _indent: Token,
        experimental: Token | None,
        deprecated: Token | None,
        optional: Token | None,
        ty: Type,
        name: Token,
    ) -> DeclarationHead:
        """Transform param rule."""
        return DeclarationHead(
            name=str(name),
            experimental=_flag(experimental),
            deprecated=_flag(deprecated),
            optional=_flag(optional),
            ty=ty,
        )

    # =========================================================================
    # Types
    # =========================================================================

    def array_type(self, _array_of: Token, items: Type) -> ArrayType:
        """Transform array_type rule."""
        return ArrayType(items)

    def named_type(self, word: Token) -> Type:
        """Transform named_type rule."""
        return type_from_word(str(word))


_transformer = LineTransformer()


def transform(tree: Tree) -> object:
    """Transform a line parse tree into its model value.

    Args:
        tree: Tree produced by the line parser for one start rule.

    Returns:
        The model value for that line; never None.

    """
    return _transformer.transform(tree)

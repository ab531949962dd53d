"""Document model dataclasses for PDL.

Define the typed nodes produced by the parser and consumed by the renderers.
Nodes are frozen dataclasses compared structurally, so two parses of
equivalent sources are equal.
"""

from dataclasses import dataclass, field
from enum import Enum

from pdl.log import get_logger

logger = get_logger(__name__)


Description = list[str]
"""Trimmed comment lines documenting a declaration, in source order."""


# =============================================================================
# Types
# =============================================================================


class ScalarKind(str, Enum):
    """Built-in scalar type keywords."""

    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    OBJECT = "object"
    ANY = "any"
    BINARY = "binary"


@dataclass(frozen=True)
class ScalarType:
    """One of the built-in scalar types (e.g. ``integer``)."""

    kind: ScalarKind


@dataclass(frozen=True)
class EnumType:
    """Inline ``enum`` type.

    Variants are only populated for parameters, from the indented lines that
    follow the parameter declaration.
    """

    variants: list["Variant"] = field(default_factory=list)


@dataclass(frozen=True)
class ArrayType:
    """``array of <type>``."""

    items: "Type"


@dataclass(frozen=True)
class RefType:
    """Reference to a named type, stored as written and never resolved."""

    name: str


Type = ScalarType | EnumType | ArrayType | RefType
"""Any type expression accepted after ``extends`` or in a parameter."""


SCALAR_KEYWORDS: dict[str, ScalarKind] = {kind.value: kind for kind in ScalarKind}
"""Lookup table from type keyword to scalar kind."""

ENUM_KEYWORD = "enum"
"""Type keyword producing an inline enum."""


def type_from_word(word: str) -> Type:
    """Map a bare type word to its type.

    Args:
        word: Type token as written in the source.

    Returns:
        The scalar or enum type for known keywords, otherwise a reference.

    """
    if word == ENUM_KEYWORD:
        return EnumType()
    kind = SCALAR_KEYWORDS.get(word)
    if kind is not None:
        return ScalarType(kind)
    return RefType(word)


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True)
class Version:
    """Protocol version."""

    major: int
    minor: int


@dataclass(frozen=True)
class Variant:
    """One member of an enum."""

    name: str
    description: Description = field(default_factory=list)


@dataclass(frozen=True)
class Param:
    """Parameter, return value or object property."""

    name: str
    ty: Type
    description: Description = field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False
    optional: bool = False


@dataclass(frozen=True)
class EnumItem:
    """Named enum attached to a type definition."""

    variants: list[Variant]


@dataclass(frozen=True)
class PropertiesItem:
    """Property list attached to an object type definition."""

    properties: list[Param]


Item = EnumItem | PropertiesItem
"""Payload refining a type definition."""


@dataclass(frozen=True)
class TypeDef:
    """Named type definition (``type <id> extends <type>``)."""

    id: str
    extends: Type
    item: Item | None = None
    description: Description = field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False
    optional: bool = False


@dataclass(frozen=True)
class Redirect:
    """Pointer to the domain that holds the equivalent declaration."""

    to: str
    description: Description = field(default_factory=list)


@dataclass(frozen=True)
class Command:
    """Invokable command with parameters and return values."""

    name: str
    redirect: Redirect | None = None
    parameters: list[Param] = field(default_factory=list)
    returns: list[Param] = field(default_factory=list)
    description: Description = field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False


@dataclass(frozen=True)
class Event:
    """Notification with parameters."""

    name: str
    parameters: list[Param] = field(default_factory=list)
    description: Description = field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False


@dataclass(frozen=True)
class Domain:
    """Named group of types, commands and events."""

    name: str
    dependencies: list[str] = field(default_factory=list)
    types: list[TypeDef] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    description: Description = field(default_factory=list)
    experimental: bool = False
    deprecated: bool = False


@dataclass(frozen=True)
class Document:
    """A parsed PDL file."""

    version: Version
    domains: list[Domain] = field(default_factory=list)
    description: Description = field(default_factory=list)

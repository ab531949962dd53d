"""PDL toolkit.

Parse the Protocol Definition Language of the Chrome DevTools protocol into
a document model and render it as canonical PDL text, JSON or Markdown.
"""

from pdl.ast.nodes import (
    ArrayType,
    Command,
    Document,
    Domain,
    EnumItem,
    EnumType,
    Event,
    Param,
    PropertiesItem,
    Redirect,
    RefType,
    ScalarKind,
    ScalarType,
    TypeDef,
    Variant,
    Version,
)
from pdl.errors import Diagnostic, DiagnosticReporter, ErrorCode, Severity
from pdl.parser import (
    PdlError,
    PdlIncomplete,
    PdlMalformed,
    PdlSyntaxError,
    parse,
)
from pdl.render import (
    render_json,
    render_json_pretty,
    render_markdown,
    render_text,
    to_json_dict,
)

__all__ = [
    "ArrayType",
    "Command",
    "Diagnostic",
    "DiagnosticReporter",
    "Document",
    "Domain",
    "EnumItem",
    "EnumType",
    "ErrorCode",
    "Event",
    "Param",
    "PdlError",
    "PdlIncomplete",
    "PdlMalformed",
    "PdlSyntaxError",
    "PropertiesItem",
    "Redirect",
    "RefType",
    "ScalarKind",
    "ScalarType",
    "Severity",
    "TypeDef",
    "Variant",
    "Version",
    "parse",
    "render_json",
    "render_json_pretty",
    "render_markdown",
    "render_text",
    "to_json_dict",
]

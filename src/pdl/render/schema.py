"""JSON renderer for PDL.

Render a Document in the layout of the Chrome DevTools ``protocol.json``:
types are flattened into their owner object, flags and descriptions are only
present when set, and empty collections are omitted.
"""

import json
from typing import Any

from pdl.ast.nodes import (
    ArrayType,
    Command,
    Document,
    Domain,
    EnumItem,
    EnumType,
    Event,
    Param,
    RefType,
    ScalarType,
    Type,
    TypeDef,
)
from pdl.log import get_logger

logger = get_logger(__name__)

JsonObject = dict[str, Any]
"""A JSON object under construction, keys in output order."""

PRETTY_INDENT = 2
"""Indentation of pretty-printed JSON."""


def type_schema(ty: Type) -> JsonObject:
    """Build the schema fragment of a type.

    Args:
        ty: Type to describe.

    Returns:
        ``{"type": ...}`` for scalars, enums and arrays, ``{"$ref": ...}`` for
        references.

    """
    if isinstance(ty, ScalarType):
        return {"type": ty.kind.value}
    if isinstance(ty, EnumType):
        return {"type": "string", "enum": [variant.name for variant in ty.variants]}
    if isinstance(ty, ArrayType):
        return {"type": "array", "items": type_schema(ty.items)}
    if isinstance(ty, RefType):
        return {"$ref": ty.name}
    msg = f"Unsupported type: {ty!r}"
    raise TypeError(msg)


def _annotate(
    obj: JsonObject,
    description: list[str],
    *,
    experimental: bool,
    deprecated: bool,
    optional: bool = False,
) -> JsonObject:
    """Add the description and any set flags to an object."""
    if description:
        obj["description"] = " ".join(description)
    if experimental:
        obj["experimental"] = True
    if deprecated:
        obj["deprecated"] = True
    if optional:
        obj["optional"] = True
    return obj


def _param(param: Param) -> JsonObject:
    obj = _annotate(
        {"name": param.name},
        param.description,
        experimental=param.experimental,
        deprecated=param.deprecated,
        optional=param.optional,
    )
    obj.update(type_schema(param.ty))
    return obj


def _params(obj: JsonObject, key: str, params: list[Param]) -> None:
    if params:
        obj[key] = [_param(param) for param in params]


def _type_def(type_def: TypeDef) -> JsonObject:
    obj = _annotate(
        {"id": type_def.id},
        type_def.description,
        experimental=type_def.experimental,
        deprecated=type_def.deprecated,
        optional=type_def.optional,
    )
    obj.update(type_schema(type_def.extends))

    item = type_def.item
    if isinstance(item, EnumItem):
        obj["enum"] = [variant.name for variant in item.variants]
    elif item is not None:
        _params(obj, "properties", item.properties)
    return obj


def _command(command: Command) -> JsonObject:
    obj = _annotate(
        {"name": command.name},
        command.description,
        experimental=command.experimental,
        deprecated=command.deprecated,
    )
    # The redirect's own description has no place in this form
    if command.redirect is not None:
        obj["redirect"] = command.redirect.to
    _params(obj, "parameters", command.parameters)
    _params(obj, "returns", command.returns)
    return obj


def _event(event: Event) -> JsonObject:
    obj = _annotate(
        {"name": event.name},
        event.description,
        experimental=event.experimental,
        deprecated=event.deprecated,
    )
    _params(obj, "parameters", event.parameters)
    return obj


def _domain(domain: Domain) -> JsonObject:
    obj = _annotate(
        {"domain": domain.name},
        domain.description,
        experimental=domain.experimental,
        deprecated=domain.deprecated,
    )
    if domain.dependencies:
        obj["dependencies"] = list(domain.dependencies)
    if domain.types:
        obj["types"] = [_type_def(type_def) for type_def in domain.types]
    if domain.commands:
        obj["commands"] = [_command(command) for command in domain.commands]
    if domain.events:
        obj["events"] = [_event(event) for event in domain.events]
    return obj


def to_json_dict(document: Document) -> JsonObject:
    """Convert a Document to its JSON structure.

    Args:
        document: Parsed document.

    Returns:
        Plain dict ready for ``json.dumps``. Version numbers are strings.

    """
    obj: JsonObject = {}
    if document.description:
        obj["description"] = " ".join(document.description)
    obj["version"] = {
        "major": str(document.version.major),
        "minor": str(document.version.minor),
    }
    if document.domains:
        obj["domains"] = [_domain(domain) for domain in document.domains]
    return obj


def render_json(document: Document) -> str:
    """Render a Document as compact JSON.

    Args:
        document: Parsed document.

    Returns:
        JSON text without insignificant whitespace.

    """
    logger.debug("Rendering %d domains as JSON", len(document.domains))
    return json.dumps(
        to_json_dict(document),
        ensure_ascii=False,
        separators=(",", ":"),
    )


def render_json_pretty(document: Document) -> str:
    """Render a Document as pretty-printed JSON.

    Args:
        document: Parsed document.

    Returns:
        JSON text indented by two spaces.

    """
    logger.debug("Rendering %d domains as pretty JSON", len(document.domains))
    return json.dumps(to_json_dict(document), ensure_ascii=False, indent=PRETTY_INDENT)

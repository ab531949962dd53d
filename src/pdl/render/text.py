"""Canonical PDL text renderer.

Render a Document back to PDL source that parses to an equal Document.
"""

from io import StringIO
from typing import TextIO

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
    Variant,
)
from pdl.log import get_logger
from pdl.render.emitter import TextEmitter

logger = get_logger(__name__)


def format_type(ty: Type) -> str:
    """Format a type expression as written in PDL.

    Args:
        ty: Type to format.

    Returns:
        Type expression, e.g. ``array of string``.

    """
    if isinstance(ty, ScalarType):
        return ty.kind.value
    if isinstance(ty, EnumType):
        return "enum"
    if isinstance(ty, ArrayType):
        return f"array of {format_type(ty.items)}"
    if isinstance(ty, RefType):
        return ty.name
    msg = f"Unsupported type: {ty!r}"
    raise TypeError(msg)


def _modifiers(
    *,
    experimental: bool,
    deprecated: bool,
    optional: bool = False,
) -> str:
    """Format head modifiers in their fixed order."""
    return (
        ("experimental " if experimental else "")
        + ("deprecated " if deprecated else "")
        + ("optional " if optional else "")
    )


def _write_description(emitter: TextEmitter, description: list[str]) -> None:
    for line in description:
        emitter.emit_comment(line)


def _write_variants(emitter: TextEmitter, variants: list[Variant]) -> None:
    for variant in variants:
        _write_description(emitter, variant.description)
        emitter.emit(variant.name)


def _write_param(emitter: TextEmitter, param: Param) -> None:
    _write_description(emitter, param.description)
    modifiers = _modifiers(
        experimental=param.experimental,
        deprecated=param.deprecated,
        optional=param.optional,
    )
    emitter.emit(f"{modifiers}{format_type(param.ty)} {param.name}")
    if isinstance(param.ty, EnumType):
        _write_variants(emitter.nested(), param.ty.variants)


def _write_params(emitter: TextEmitter, keyword: str, params: list[Param]) -> None:
    if not params:
        return
    emitter.emit(keyword)
    nested = emitter.nested()
    for param in params:
        _write_param(nested, param)


def _write_type_def(emitter: TextEmitter, type_def: TypeDef) -> None:
    _write_description(emitter, type_def.description)
    modifiers = _modifiers(
        experimental=type_def.experimental,
        deprecated=type_def.deprecated,
        optional=type_def.optional,
    )
    emitter.emit(
        f"{modifiers}type {type_def.id} extends {format_type(type_def.extends)}",
    )

    item = type_def.item
    if item is None:
        return
    body = emitter.nested()
    if isinstance(item, EnumItem):
        body.emit("enum")
        _write_variants(body.nested(), item.variants)
    else:
        _write_params(body, "properties", item.properties)


def _write_command(emitter: TextEmitter, command: Command) -> None:
    _write_description(emitter, command.description)
    modifiers = _modifiers(
        experimental=command.experimental,
        deprecated=command.deprecated,
    )
    emitter.emit(f"{modifiers}command {command.name}")

    body = emitter.nested()
    if command.redirect is not None:
        _write_description(body, command.redirect.description)
        body.emit(f"redirect {command.redirect.to}")
    _write_params(body, "parameters", command.parameters)
    _write_params(body, "returns", command.returns)


def _write_event(emitter: TextEmitter, event: Event) -> None:
    _write_description(emitter, event.description)
    modifiers = _modifiers(experimental=event.experimental, deprecated=event.deprecated)
    emitter.emit(f"{modifiers}event {event.name}")
    _write_params(emitter.nested(), "parameters", event.parameters)


def _write_domain(emitter: TextEmitter, domain: Domain) -> None:
    _write_description(emitter, domain.description)
    modifiers = _modifiers(
        experimental=domain.experimental,
        deprecated=domain.deprecated,
    )
    emitter.emit(f"{modifiers}domain {domain.name}")

    body = emitter.nested()
    for dependency in domain.dependencies:
        body.emit(f"depends on {dependency}")
    # Blank lines keep each declaration from reading as part of the previous one
    for type_def in domain.types:
        body.emit_blank()
        _write_type_def(body, type_def)
    for command in domain.commands:
        body.emit_blank()
        _write_command(body, command)
    for event in domain.events:
        body.emit_blank()
        _write_event(body, event)


def write_text(document: Document, sink: TextIO) -> None:
    """Write a Document as canonical PDL text.

    Args:
        document: Parsed document.
        sink: Stream receiving the text.

    """
    emitter = TextEmitter(sink)
    _write_description(emitter, document.description)
    if document.description:
        emitter.emit_blank()

    emitter.emit("version")
    version = emitter.nested()
    version.emit(f"major {document.version.major}")
    version.emit(f"minor {document.version.minor}")

    for domain in document.domains:
        emitter.emit_blank()
        _write_domain(emitter, domain)


def render_text(document: Document) -> str:
    """Render a Document as canonical PDL text.

    Args:
        document: Parsed document.

    Returns:
        PDL source that parses back to an equal document.

    """
    output = StringIO()
    write_text(document, output)
    logger.debug("Rendered %d domains as PDL text", len(document.domains))
    return output.getvalue()

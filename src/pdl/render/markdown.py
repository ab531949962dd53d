"""Markdown documentation renderer for PDL.

Render one documentation page per Document: a section per domain with its
methods, types and events, each listing its members in tables.
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

logger = get_logger(__name__)

TABLE_HEADER = "| Name | Type | Description |\n| --- | --- | --- |"
"""Header of member tables."""

ALLOWED_VALUES_HEADER = "| ALLOWED VALUES | Description |\n| --- | --- |"
"""Header of the variant table of an enum type."""


def _cell(text: str) -> str:
    """Escape text for use inside a table cell."""
    return text.replace("|", "\\|")


def _join(description: list[str]) -> str:
    return " ".join(description)


def _badges(
    *,
    experimental: bool = False,
    deprecated: bool = False,
    optional: bool = False,
) -> str:
    """Format inline badges for set flags, with a leading space."""
    badges = [
        f"*{name}*"
        for name, flag in (
            ("optional", optional),
            ("experimental", experimental),
            ("deprecated", deprecated),
        )
        if flag
    ]
    return "".join(f" {badge}" for badge in badges)


def _anchor(domain: str, name: str) -> str:
    return f"{domain}.{name}"


class MarkdownWriter:
    """Markdown documentation writer for a parsed protocol."""

    def __init__(self, sink: TextIO, title: str) -> None:
        """Initialize a writer producing a page with the given title."""
        self._sink = sink
        self._title = title

    def _write_line(self, md_line: str = "") -> None:
        self._sink.write(md_line)
        self._sink.write("\n")

    def write(self, document: Document) -> None:
        """Write the documentation page for a document."""
        version = document.version
        self._write_line(f"# {self._title} v{version.major}.{version.minor}\n")
        if document.description:
            self._write_line(f"{_join(document.description)}\n")

        for domain in document.domains:
            self._write_domain(domain)

    def _format_type(self, ty: Type, domain: Domain) -> str:
        if isinstance(ty, ScalarType):
            return f"`{ty.kind.value}`"
        if isinstance(ty, EnumType):
            return "`enum`"
        if isinstance(ty, ArrayType):
            return f"array[ {self._format_type(ty.items, domain)} ]"
        if isinstance(ty, RefType):
            # Local names are linked within the domain, dotted names as written
            target = ty.name if "." in ty.name else _anchor(domain.name, ty.name)
            return f"[`{ty.name}`](#{target})"
        msg = f"Unsupported type: {ty!r}"
        raise TypeError(msg)

    def _allowed_values_html(self, variants: list[Variant]) -> str:
        rows = "".join(
            f"<tr><td><code>{variant.name}</code></td>"
            f"<td>{_join(variant.description)}</td></tr>"
            for variant in variants
        )
        return (
            "<table><tr><th>ALLOWED VALUES</th><th>Description</th></tr>"
            f"{rows}</table>"
        )

    def _with_allowed_values(self, description: str, variants: list[Variant]) -> str:
        if not variants:
            return description
        allowed = self._allowed_values_html(variants)
        return f"{description}<br>{allowed}" if description else allowed

    def _member_link(  # noqa: PLR0913
        self,
        domain: Domain,
        name: str,
        *,
        experimental: bool,
        deprecated: bool,
        optional: bool = False,
    ) -> str:
        badges = _badges(
            experimental=experimental,
            deprecated=deprecated,
            optional=optional,
        )
        return f"[`{name}`](#{_anchor(domain.name, name)}){badges}"

    def _write_member_table(self, rows: list[tuple[str, str, str]]) -> None:
        """Write the Name/Type/Description overview of a section."""
        self._write_line(TABLE_HEADER)
        for name, kind, description in rows:
            self._write_line(f"| {name} | {kind} | {_cell(description)} |")
        self._write_line()

    def _write_params(self, heading: str, params: list[Param], domain: Domain) -> None:
        if not params:
            return
        self._write_line(f"**{heading}**\n")
        self._write_line(TABLE_HEADER)
        for param in params:
            badges = _badges(
                experimental=param.experimental,
                deprecated=param.deprecated,
                optional=param.optional,
            )
            description = _join(param.description)
            if isinstance(param.ty, EnumType):
                description = self._with_allowed_values(description, param.ty.variants)
            self._write_line(
                f"| `{param.name}`{badges} "
                f"| {self._format_type(param.ty, domain)} "
                f"| {_cell(description)} |",
            )
        self._write_line()

    def _write_member_heading(
        self,
        domain: Domain,
        name: str,
        description: list[str],
        *,
        experimental: bool,
        deprecated: bool,
    ) -> None:
        anchor = _anchor(domain.name, name)
        badges = _badges(experimental=experimental, deprecated=deprecated)
        self._write_line(f'<a name="{anchor}"></a>\n')
        self._write_line(f"#### `{anchor}`{badges}\n")
        if description:
            self._write_line(f"{_join(description)}\n")

    def _write_command(self, domain: Domain, command: Command) -> None:
        self._write_member_heading(
            domain,
            command.name,
            command.description,
            experimental=command.experimental,
            deprecated=command.deprecated,
        )
        redirect = command.redirect
        if redirect is not None:
            self._write_line(f"Redirects to [`{redirect.to}`](#{redirect.to}).\n")
            if redirect.description:
                self._write_line(f"> {_join(redirect.description)}\n")
        self._write_params("Parameters", command.parameters, domain)
        self._write_params("Returns", command.returns, domain)

    def _write_type_def(self, domain: Domain, type_def: TypeDef) -> None:
        self._write_member_heading(
            domain,
            type_def.id,
            type_def.description,
            experimental=type_def.experimental,
            deprecated=type_def.deprecated,
        )
        self._write_line(f"Type: {self._format_type(type_def.extends, domain)}\n")

        item = type_def.item
        if isinstance(item, EnumItem):
            self._write_line(ALLOWED_VALUES_HEADER)
            for variant in item.variants:
                self._write_line(
                    f"| `{variant.name}` | {_cell(_join(variant.description))} |",
                )
            self._write_line()
        elif item is not None:
            self._write_params("Properties", item.properties, domain)

    def _type_def_row(
        self,
        domain: Domain,
        type_def: TypeDef,
    ) -> tuple[str, str, str]:
        description = _join(type_def.description)
        if isinstance(type_def.item, EnumItem):
            description = self._with_allowed_values(
                description,
                type_def.item.variants,
            )
        name = self._member_link(
            domain,
            type_def.id,
            experimental=type_def.experimental,
            deprecated=type_def.deprecated,
            optional=type_def.optional,
        )
        return name, self._format_type(type_def.extends, domain), description

    def _write_event(self, domain: Domain, event: Event) -> None:
        self._write_member_heading(
            domain,
            event.name,
            event.description,
            experimental=event.experimental,
            deprecated=event.deprecated,
        )
        self._write_params("Parameters", event.parameters, domain)

    def _write_domain(self, domain: Domain) -> None:
        badges = _badges(
            experimental=domain.experimental,
            deprecated=domain.deprecated,
        )
        self._write_line(f'<a name="{domain.name}"></a>\n')
        self._write_line(f"## {domain.name}{badges}\n")
        if domain.description:
            self._write_line(f"{_join(domain.description)}\n")
        if domain.dependencies:
            links = ", ".join(f"[{dep}](#{dep})" for dep in domain.dependencies)
            self._write_line(f"Depends on: {links}\n")

        if domain.commands:
            self._write_line("### Methods\n")
            self._write_member_table(
                [
                    (
                        self._member_link(
                            domain,
                            command.name,
                            experimental=command.experimental,
                            deprecated=command.deprecated,
                        ),
                        "method",
                        _join(command.description),
                    )
                    for command in domain.commands
                ],
            )
            for command in domain.commands:
                self._write_command(domain, command)
        if domain.types:
            self._write_line("### Types\n")
            self._write_member_table(
                [self._type_def_row(domain, type_def) for type_def in domain.types],
            )
            for type_def in domain.types:
                self._write_type_def(domain, type_def)
        if domain.events:
            self._write_line("### Events\n")
            self._write_member_table(
                [
                    (
                        self._member_link(
                            domain,
                            event.name,
                            experimental=event.experimental,
                            deprecated=event.deprecated,
                        ),
                        "event",
                        _join(event.description),
                    )
                    for event in domain.events
                ],
            )
            for event in domain.events:
                self._write_event(domain, event)


def render_markdown(document: Document, title: str) -> str:
    """Render a Document as Markdown documentation.

    Args:
        document: Parsed document.
        title: Page title, followed by the protocol version in the heading.

    Returns:
        Markdown text.

    """
    output = StringIO()
    MarkdownWriter(output, title).write(document)
    logger.debug("Rendered %d domains as markdown", len(document.domains))
    return output.getvalue()

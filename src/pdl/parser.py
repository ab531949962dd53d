"""Protocol parser for PDL.

Assemble a Document from the line productions of the PDL grammar by
recursive descent over physical lines. Every declaration parser either
matches completely and advances the cursor, or returns None; the cursor is
restored by the caller (``_attempt``), so repetition loops stop cleanly at
the first line that does not fit.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark, UnexpectedInput

from pdl.ast.nodes import (
    Command,
    Document,
    Domain,
    EnumItem,
    EnumType,
    Event,
    Item,
    Param,
    PropertiesItem,
    Redirect,
    TypeDef,
    Variant,
    Version,
)
from pdl.ast.transformer import transform
from pdl.errors.codes import HELP_TEXTS, ErrorCode, format_error_message
from pdl.errors.diagnostics import Diagnostic
from pdl.grammar.parser import ParserFactory
from pdl.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RULE_NAMES: dict[str, str] = {
    "comment": "comment",
    "version": "'version'",
    "major": "'major <number>'",
    "minor": "'minor <number>'",
    "domain": "domain declaration",
    "depends_on": "'depends on <domain>'",
    "type_def": "type definition",
    "enum_item": "'enum'",
    "properties_item": "'properties'",
    "variant": "enum variant",
    "command": "command declaration",
    "event": "event declaration",
    "redirect": "'redirect <domain>'",
    "parameters": "'parameters'",
    "returns": "'returns'",
    "param": "parameter",
}
"""Human-readable names of line productions for error messages."""


@dataclass
class _Failure:
    """Furthest point at which a line production failed to match."""

    index: int
    """Line index (0-based)."""

    column: int
    """Column within the line (0-based)."""

    rule: str
    """Line production that was expected."""


class ProtocolParser:
    """Recursive descent parser over the lines of one PDL document.

    A parser instance holds the cursor for a single input and must not be
    reused; use :func:`parse` instead of instantiating it directly.
    """

    def __init__(self, text: str, *, final: bool = True) -> None:
        """Initialize the parser for a complete or partial input.

        Args:
            text: PDL source.
            final: Whether ``text`` is the whole input. When False, running
                out of input raises PdlIncomplete instead of failing a match.

        """
        self._text = text
        self._lines = text.split("\n")
        # The last split element follows the final newline and has no eol,
        # so only the lines before it can match a line production.
        self._complete = len(self._lines) - 1
        self._offsets = [0]
        for line in self._lines[:-1]:
            self._offsets.append(self._offsets[-1] + len(line) + 1)
        self._final = final
        self._pos = 0
        self._furthest: _Failure | None = None
        self._lark: Lark = ParserFactory.create()

    # =========================================================================
    # Combinators
    # =========================================================================

    def _line(self, rule: str) -> Any:  # noqa: ANN401
        """Match the current line against a line production.

        Args:
            rule: Start rule of the line grammar.

        Returns:
            The transformed line value, or None if the line does not match.

        """
        if self._pos >= self._complete:
            if not self._final:
                raise self._incomplete(rule)
            self._record_failure(rule, 0)
            return None

        line = self._lines[self._pos]
        try:
            tree = self._lark.parse(line, start=rule)
        except UnexpectedInput as e:
            # Lark columns are 1-based; end-of-input errors carry -1
            if isinstance(e.column, int) and e.column > 0:
                column = e.column - 1
            else:
                column = len(line)
            self._record_failure(rule, column)
            return None

        self._pos += 1
        return transform(tree)

    def _attempt(self, rule: Callable[[], T | None]) -> T | None:
        """Run a rule, restoring the cursor if it does not match."""
        start = self._pos
        result = rule()
        if result is None:
            self._pos = start
        return result

    def _many(self, rule: Callable[[], T | None]) -> list[T]:
        """Collect matches of a rule until it first fails."""
        items: list[T] = []
        while (item := self._attempt(rule)) is not None:
            items.append(item)
        return items

    def _after_blank_lines(
        self,
        rule: Callable[[], T | None],
    ) -> Callable[[], T | None]:
        """Wrap a rule so that it skips blank lines before matching."""

        def parse_after_blank_lines() -> T | None:
            self._skip_blank_lines()
            return rule()

        return parse_after_blank_lines

    def _skip_blank_lines(self) -> None:
        while self._pos < self._complete and not self._lines[self._pos]:
            self._pos += 1

    def _description(self) -> list[str]:
        """Collect the comment lines immediately preceding a declaration."""
        return self._many(lambda: self._line("comment"))

    # =========================================================================
    # Protocol and version
    # =========================================================================

    def parse(self) -> tuple[Document, str]:
        """Parse the whole protocol.

        Returns:
            Tuple of (document, unparsed remainder of the input).

        Raises:
            PdlMalformed: If the version block or the first domain is missing.
            PdlIncomplete: If the input is not final and ended mid-construct.

        """
        description = self._description()
        self._skip_blank_lines()

        version = self._attempt(self._version)
        if version is None:
            raise self._malformed("version block")

        domains = self._many(self._after_blank_lines(self._domain))
        if not domains:
            raise self._malformed("domain")

        document = Document(
            version=version,
            domains=domains,
            description=description,
        )
        remainder = self._text[self._offsets[self._pos] :]
        logger.debug(
            "Parsed protocol %d.%d with %d domains, %d characters unparsed",
            version.major,
            version.minor,
            len(domains),
            len(remainder),
        )
        return document, remainder

    def _version(self) -> Version | None:
        if self._line("version") is None:
            return None
        major = self._line("major")
        if major is None:
            return None
        minor = self._line("minor")
        if minor is None:
            return None
        return Version(major=major, minor=minor)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _domain(self) -> Domain | None:
        description = self._description()
        head = self._line("domain")
        if head is None:
            return None

        domain = Domain(
            name=head.name,
            dependencies=self._many(self._after_blank_lines(self._depends_on)),
            types=self._many(self._after_blank_lines(self._type_def)),
            commands=self._many(self._after_blank_lines(self._command)),
            events=self._many(self._after_blank_lines(self._event)),
            description=description,
            experimental=head.experimental,
            deprecated=head.deprecated,
        )
        logger.debug(
            "Parsed domain %s: %d types, %d commands, %d events",
            domain.name,
            len(domain.types),
            len(domain.commands),
            len(domain.events),
        )
        return domain

    def _depends_on(self) -> str | None:
        return self._line("depends_on")

    def _type_def(self) -> TypeDef | None:
        description = self._description()
        head = self._line("type_def")
        if head is None:
            return None

        type_def = TypeDef(
            id=head.name,
            extends=head.ty,
            item=self._attempt(self._item),
            description=description,
            experimental=head.experimental,
            deprecated=head.deprecated,
            optional=head.optional,
        )
        logger.debug("Parsed type %r", type_def)
        return type_def

    def _item(self) -> Item | None:
        if self._line("enum_item") is not None:
            variants = self._many(self._variant)
            return EnumItem(variants) if variants else None
        if self._line("properties_item") is not None:
            properties = self._many(self._param)
            return PropertiesItem(properties) if properties else None
        return None

    def _variant(self) -> Variant | None:
        description = self._description()
        name = self._line("variant")
        if name is None:
            return None
        return Variant(name=name, description=description)

    def _param(self) -> Param | None:
        description = self._description()
        head = self._line("param")
        if head is None:
            return None

        # Only a parameter's own enum type takes the variant lines below it;
        # the shared type rule never looks ahead.
        ty = head.ty
        if isinstance(ty, EnumType):
            variants = self._many(self._variant)
            if not variants:
                return None
            ty = EnumType(variants=variants)

        return Param(
            name=head.name,
            ty=ty,
            description=description,
            experimental=head.experimental,
            deprecated=head.deprecated,
            optional=head.optional,
        )

    def _param_block(self, keyword: str) -> list[Param] | None:
        """Match a ``parameters`` or ``returns`` line and its parameters."""
        if self._line(keyword) is None:
            return None
        return self._many(self._param) or None

    def _command(self) -> Command | None:
        description = self._description()
        head = self._line("command")
        if head is None:
            return None

        command = Command(
            name=head.name,
            redirect=self._attempt(self._redirect),
            parameters=self._attempt(lambda: self._param_block("parameters")) or [],
            returns=self._attempt(lambda: self._param_block("returns")) or [],
            description=description,
            experimental=head.experimental,
            deprecated=head.deprecated,
        )
        logger.debug("Parsed command %r", command)
        return command

    def _event(self) -> Event | None:
        description = self._description()
        head = self._line("event")
        if head is None:
            return None

        event = Event(
            name=head.name,
            parameters=self._attempt(lambda: self._param_block("parameters")) or [],
            description=description,
            experimental=head.experimental,
            deprecated=head.deprecated,
        )
        logger.debug("Parsed event %r", event)
        return event

    def _redirect(self) -> Redirect | None:
        description = self._description()
        to = self._line("redirect")
        if to is None:
            return None
        return Redirect(to=to, description=description)

    # =========================================================================
    # Error surfacing
    # =========================================================================

    def _record_failure(self, rule: str, column: int) -> None:
        furthest = self._furthest
        if (
            furthest is None
            or self._pos > furthest.index
            or (self._pos == furthest.index and column >= furthest.column)
        ):
            self._furthest = _Failure(index=self._pos, column=column, rule=rule)

    def _malformed(self, construct: str) -> "PdlMalformed":
        failure = self._furthest or _Failure(index=self._pos, column=0, rule="")
        expected = RULE_NAMES.get(failure.rule, construct)
        logger.debug("Failed to parse %s, furthest failure: %r", construct, failure)
        index = min(failure.index, self._complete)
        return PdlMalformed(
            format_error_message(ErrorCode.E0002, expected=expected),
            code=ErrorCode.E0002,
            expected=expected,
            offset=self._offsets[index] + failure.column,
            line=index + 1,
            column=failure.column,
        )

    def _incomplete(self, rule: str) -> "PdlIncomplete":
        expected = RULE_NAMES.get(rule, rule)
        return PdlIncomplete(
            format_error_message(ErrorCode.E0001, expected=expected),
            code=ErrorCode.E0001,
            expected=expected,
            offset=self._offsets[self._pos],
            line=self._pos + 1,
            column=0,
        )


def parse(text: str, *, final: bool = True) -> tuple[Document, str]:
    """Parse a PDL document.

    Args:
        text: PDL source text.
        final: Whether ``text`` is the complete input. Partial input raises
            PdlIncomplete as soon as a construct runs past its end.

    Returns:
        Tuple of (document, remainder). The remainder is whatever follows the
        last recognised domain; it is not an error for it to be non-empty.

    Raises:
        PdlMalformed: If the version block or the first domain does not match.
        PdlIncomplete: If ``final`` is False and the input ended mid-construct.

    """
    return ProtocolParser(text, final=final).parse()


class PdlError(Exception):
    """Base exception for PDL errors."""


class PdlSyntaxError(PdlError):
    """Exception for input that could not be parsed into a document."""

    def __init__(  # noqa: PLR0913
        self,
        message: str,
        *,
        code: ErrorCode,
        expected: str,
        offset: int,
        line: int,
        column: int,
    ) -> None:
        """Initialize syntax error.

        Args:
            message: Error message.
            code: Error code for diagnostics.
            expected: Name of the construct that was expected.
            offset: Character offset into the input.
            line: Line number (1-indexed).
            column: Column number (0-indexed).

        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.expected = expected
        self.offset = offset
        self.line = line
        self.column = column

    def __str__(self) -> str:
        """Format error with its location."""
        return f"{self.message} at line {self.line}, column {self.column + 1}"

    def to_diagnostic(self, filename: str) -> Diagnostic:
        """Convert this error to a diagnostic for reporting.

        Args:
            filename: Source filename.

        Returns:
            Error diagnostic pointing at the failing position.

        """
        return Diagnostic.error(
            message=self.message,
            file=filename,
            line=self.line,
            column=self.column,
            code=self.code,
            help_text=HELP_TEXTS.get(self.code),
        )


class PdlIncomplete(PdlSyntaxError):
    """The input ended before a construct could be fully matched."""


class PdlMalformed(PdlSyntaxError):
    """A construct did not match at the current position."""

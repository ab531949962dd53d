"""Tests for the PDL line grammar.

Test that each line production recognises exactly one line and that the
transformer maps it to the expected model value.
"""

import pytest
from lark import UnexpectedInput

from pdl.ast.nodes import ArrayType, EnumType, RefType, ScalarKind, ScalarType
from pdl.ast.transformer import DeclarationHead, transform
from pdl.grammar.parser import LINE_RULES, ParserFactory


@pytest.fixture
def parser():
    return ParserFactory.create()


def parse_line(parser, rule, line):
    return transform(parser.parse(line, start=rule))


class TestParserFactory:
    """Test ParserFactory creation and caching."""

    def test_creates_parser(self):
        parser = ParserFactory.create()
        assert parser is not None

    def test_reuses_cached_parser(self):
        assert ParserFactory.create() is ParserFactory.create()

    def test_clear_cache_rebuilds_parser(self):
        first = ParserFactory.create()
        ParserFactory.clear_cache()
        second = ParserFactory.create()
        assert first is not second

    def test_exposes_every_line_rule(self, parser):
        assert set(parser.options.start) == set(LINE_RULES)


class TestComments:
    """Test comment lines."""

    def test_comment_text_is_trimmed(self, parser):
        assert parse_line(parser, "comment", "#   Some text  ") == "Some text"

    def test_indented_comment(self, parser):
        assert parse_line(parser, "comment", "    # nested") == "nested"

    def test_empty_comment(self, parser):
        assert parse_line(parser, "comment", "#") == ""

    def test_rejects_non_comment(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("  type A extends string", start="comment")

    def test_rejects_blank_line(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("", start="comment")


class TestVersionLines:
    """Test the version block lines."""

    def test_major(self, parser):
        assert parse_line(parser, "major", "  major 1") == 1

    def test_minor_with_tab_indent(self, parser):
        assert parse_line(parser, "minor", "\tminor 13") == 13

    def test_major_requires_indent(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("major 1", start="major")

    def test_major_requires_digits(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("  major one", start="major")


class TestDomainHead:
    """Test domain declaration lines."""

    def test_plain_domain(self, parser):
        head = parse_line(parser, "domain", "domain Page")
        assert head == DeclarationHead(name="Page")

    def test_domain_modifiers(self, parser):
        head = parse_line(parser, "domain", "experimental deprecated domain Page")
        assert head.experimental
        assert head.deprecated

    def test_modifiers_out_of_order_are_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("deprecated experimental domain Page", start="domain")

    def test_depends_on(self, parser):
        assert parse_line(parser, "depends_on", "  depends on DOM") == "DOM"


class TestTypeExpressions:
    """Test the type rule shared by type definitions and parameters."""

    @pytest.mark.parametrize(
        ("word", "kind"),
        [
            ("integer", ScalarKind.INTEGER),
            ("number", ScalarKind.NUMBER),
            ("boolean", ScalarKind.BOOLEAN),
            ("string", ScalarKind.STRING),
            ("object", ScalarKind.OBJECT),
            ("any", ScalarKind.ANY),
            ("binary", ScalarKind.BINARY),
        ],
    )
    def test_scalar_keywords(self, parser, word, kind):
        head = parse_line(parser, "param", f"  {word} value")
        assert head.ty == ScalarType(kind)

    def test_enum_keyword(self, parser):
        head = parse_line(parser, "param", "  enum type")
        assert head.ty == EnumType()
        assert head.name == "type"

    def test_reference(self, parser):
        head = parse_line(parser, "param", "  Runtime.RemoteObject result")
        assert head.ty == RefType("Runtime.RemoteObject")

    def test_array(self, parser):
        head = parse_line(parser, "param", "  array of string names")
        assert head.ty == ArrayType(ScalarType(ScalarKind.STRING))

    def test_nested_array(self, parser):
        head = parse_line(parser, "param", "  array of array of Quad quads")
        assert head.ty == ArrayType(ArrayType(RefType("Quad")))

    def test_type_prefixed_by_keyword_is_a_reference(self, parser):
        head = parse_line(parser, "param", "  optionalThing value")
        assert head.ty == RefType("optionalThing")
        assert not head.optional


class TestParamHead:
    """Test parameter lines."""

    def test_all_modifiers(self, parser):
        head = parse_line(
            parser,
            "param",
            "      experimental deprecated optional string url",
        )
        assert head == DeclarationHead(
            name="url",
            experimental=True,
            deprecated=True,
            optional=True,
            ty=ScalarType(ScalarKind.STRING),
        )

    def test_missing_name_is_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("    returns", start="param")

    def test_trailing_words_are_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("  string a b", start="param")


class TestTypeDefHead:
    """Test type definition lines."""

    def test_type_def(self, parser):
        head = parse_line(parser, "type_def", "  type AXNodeId extends string")
        assert head == DeclarationHead(
            name="AXNodeId",
            ty=ScalarType(ScalarKind.STRING),
        )

    def test_optional_type_def(self, parser):
        head = parse_line(
            parser,
            "type_def",
            "  experimental optional type Quad extends array of number",
        )
        assert head.experimental
        assert not head.deprecated
        assert head.optional
        assert head.ty == ArrayType(ScalarType(ScalarKind.NUMBER))

    def test_item_keywords(self, parser):
        assert parse_line(parser, "enum_item", "    enum") == "enum"
        assert parse_line(parser, "properties_item", "    properties") == "properties"

    def test_variant(self, parser):
        assert parse_line(parser, "variant", "      booleanOrUndefined") == (
            "booleanOrUndefined"
        )


class TestCommandLines:
    """Test command and event lines."""

    def test_command(self, parser):
        head = parse_line(parser, "command", "  experimental command getCertificate")
        assert head == DeclarationHead(name="getCertificate", experimental=True)

    def test_event(self, parser):
        head = parse_line(parser, "event", "  deprecated event frameResized")
        assert head == DeclarationHead(name="frameResized", deprecated=True)

    def test_redirect(self, parser):
        assert parse_line(parser, "redirect", "    redirect Emulation") == "Emulation"

    def test_block_keywords(self, parser):
        assert parse_line(parser, "parameters", "    parameters") == "parameters"
        assert parse_line(parser, "returns", "    returns") == "returns"

    def test_command_requires_indent(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse("command enable", start="command")

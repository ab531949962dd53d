"""Tests for the Markdown documentation renderer."""

from io import StringIO

import pytest

from pdl.ast.nodes import (
    Command,
    Document,
    Domain,
    Param,
    ScalarKind,
    ScalarType,
    Version,
)
from pdl.render.markdown import MarkdownWriter, render_markdown


@pytest.fixture
def markdown(sample_document):
    return render_markdown(sample_document, "Browser Protocol")


class TestPageStructure:
    """Test headings and section order."""

    def test_title_includes_version(self, markdown):
        assert markdown.startswith("# Browser Protocol v1.3\n\n")

    def test_document_description(self, markdown):
        assert "\nCopyright note  Second line.\n" in markdown

    def test_domain_heading_with_badge(self, markdown):
        assert "\n## Accessibility *experimental*\n" in markdown
        assert "\n## DOM\n" in markdown

    def test_dependencies_are_linked(self, markdown):
        assert "Depends on: [DOM](#DOM), [Runtime](#Runtime)" in markdown

    def test_sections_in_order(self, markdown):
        methods = markdown.index("### Methods")
        types = markdown.index("### Types")
        events = markdown.index("### Events")
        assert methods < types < events

    def test_empty_sections_are_omitted(self):
        document = Document(version=Version(1, 0), domains=[Domain(name="Page")])
        markdown = render_markdown(document, "Page")
        assert "###" not in markdown

    def test_writer_writes_to_sink(self, sample_document, markdown):
        sink = StringIO()
        MarkdownWriter(sink, "Browser Protocol").write(sample_document)
        assert sink.getvalue() == markdown


class TestSectionTables:
    """Test the Name/Type/Description overview of each section."""

    def test_types_table(self, markdown):
        assert (
            "### Types\n\n"
            "| Name | Type | Description |\n"
            "| --- | --- | --- |\n"
            "| [`AXNodeId`](#Accessibility.AXNodeId) | `string` "
            "| Unique accessibility node identifier. |\n"
            "| [`AXValueType`](#Accessibility.AXValueType) | `string` "
            "| Enum of possible property types.<br>"
            "<table><tr><th>ALLOWED VALUES</th><th>Description</th></tr>"
            "<tr><td><code>boolean</code></td><td></td></tr>"
            "<tr><td><code>tristate</code></td><td>A tristate value.</td></tr>"
            "<tr><td><code>booleanOrUndefined</code></td><td></td></tr>"
            "</table> |\n"
            "| [`AXValueSource`](#Accessibility.AXValueSource) | `object` "
            "| A single source for a computed AX property. |\n"
            "| [`AXMaybe`](#Accessibility.AXMaybe) *optional* "
            "| [`DOM.NodeId`](#DOM.NodeId) |  |\n"
            "\n"
            '<a name="Accessibility.AXNodeId"></a>\n'
        ) in markdown

    def test_type_alias_row(self, markdown):
        assert (
            "### Types\n\n"
            "| Name | Type | Description |\n"
            "| --- | --- | --- |\n"
            "| [`NodeId`](#DOM.NodeId) | `integer` |  |\n"
        ) in markdown

    def test_methods_table(self, markdown):
        assert (
            "### Methods\n\n"
            "| Name | Type | Description |\n"
            "| --- | --- | --- |\n"
            "| [`getCertificate`](#Accessibility.getCertificate) *experimental* "
            "| method | Returns the DER-encoded certificate. |\n"
            "| [`hideHighlight`](#Accessibility.hideHighlight) | method |  |\n"
            "| [`setMode`](#Accessibility.setMode) *deprecated* | method |  |\n"
        ) in markdown

    def test_events_table(self, markdown):
        assert (
            "### Events\n\n"
            "| Name | Type | Description |\n"
            "| --- | --- | --- |\n"
            "| [`virtualTimeAdvanced`](#Accessibility.virtualTimeAdvanced) "
            "*experimental* | event "
            "| Notification sent after the virtual time has advanced. |\n"
        ) in markdown


class TestMembers:
    """Test rendering of commands, types and events."""

    def test_member_heading(self, markdown):
        assert "\n#### `Accessibility.getCertificate` *experimental*\n" in markdown
        assert '<a name="Accessibility.getCertificate"></a>' in markdown

    def test_member_description(self, markdown):
        assert "\nReturns the DER-encoded certificate.\n" in markdown

    def test_parameter_table(self, markdown):
        assert (
            "**Parameters**\n\n"
            "| Name | Type | Description |\n"
            "| --- | --- | --- |\n"
            "| `origin` | `string` | Origin to get certificate for. |\n"
        ) in markdown

    def test_array_type(self, markdown):
        assert "| `tableNames` | array[ `string` ] |  |" in markdown
        assert "array[ array[ `number` ] ]" in markdown

    def test_reference_links(self, markdown):
        assert (
            "| `type` | [`AXValueSourceType`](#Accessibility.AXValueSourceType) "
            "| What type of source this is. |"
        ) in markdown
        assert "Type: [`DOM.NodeId`](#DOM.NodeId)" in markdown

    def test_optional_badge(self, markdown):
        assert "| `value` *optional* | [`AXValue`](#Accessibility.AXValue) |  |" in (
            markdown
        )

    def test_redirect(self, markdown):
        assert "Redirects to [`Overlay`](#Overlay).\n" in markdown
        assert "> Use 'Overlay.hideHighlight' instead\n" in markdown

    def test_enum_param_allowed_values(self, markdown):
        assert (
            "| `type` | `enum` | Animation type of `Animation`.<br>"
            "<table><tr><th>ALLOWED VALUES</th><th>Description</th></tr>"
            "<tr><td><code>CSSTransition</code></td><td></td></tr>"
        ) in markdown

    def test_enum_type_allowed_values(self, markdown):
        assert (
            "| ALLOWED VALUES | Description |\n"
            "| --- | --- |\n"
            "| `boolean` |  |\n"
            "| `tristate` | A tristate value. |\n"
        ) in markdown

    def test_event(self, markdown):
        assert "\n#### `Accessibility.virtualTimeAdvanced` *experimental*\n" in (
            markdown
        )
        assert "| `virtualTimeElapsed` | `number` |  |" in markdown

    def test_pipes_are_escaped(self):
        document = Document(
            version=Version(1, 0),
            domains=[
                Domain(
                    name="Page",
                    commands=[
                        Command(
                            name="navigate",
                            returns=[
                                Param(
                                    name="mode",
                                    ty=ScalarType(ScalarKind.STRING),
                                    description=["Either a | b."],
                                ),
                            ],
                            deprecated=True,
                        ),
                    ],
                ),
            ],
        )
        markdown = render_markdown(document, "Page")
        assert "| `mode` | `string` | Either a \\| b. |" in markdown
        assert "**Returns**" in markdown
        assert "#### `Page.navigate` *deprecated*" in markdown

"""Renderers for parsed PDL documents.

Provide canonical PDL text, Chrome-style JSON and Markdown documentation
output for a Document.
"""

from pdl.render.emitter import IndentedEmitter, TextEmitter
from pdl.render.markdown import MarkdownWriter, render_markdown
from pdl.render.schema import (
    render_json,
    render_json_pretty,
    to_json_dict,
    type_schema,
)
from pdl.render.text import format_type, render_text, write_text

__all__ = [
    "IndentedEmitter",
    "MarkdownWriter",
    "TextEmitter",
    "format_type",
    "render_json",
    "render_json_pretty",
    "render_markdown",
    "render_text",
    "to_json_dict",
    "type_schema",
    "write_text",
]

"""Line emitter for PDL text rendering.

Manage indentation structurally: each nesting level is an emitter wrapping
its parent and prefixing every line it forwards, so renderers never track
indentation depth themselves.
"""

from typing import TextIO

from pdl.log import get_logger

logger = get_logger(__name__)

DEFAULT_INDENT = "  "
"""Default indentation unit (2 spaces)."""


class TextEmitter:
    """Write lines of text to a sink."""

    def __init__(self, sink: TextIO, *, indent_str: str = DEFAULT_INDENT) -> None:
        """Initialize an emitter writing to a text sink.

        Args:
            sink: Stream receiving the rendered text.
            indent_str: String added in front of each line per nesting level.

        """
        self._sink = sink
        self.indent_str = indent_str

    def emit(self, line: str) -> None:
        """Emit a line of text.

        Args:
            line: The line to emit (no trailing newline).

        """
        self._sink.write(f"{line}\n")

    def emit_blank(self) -> None:
        """Emit an empty line, never indented."""
        self._sink.write("\n")

    def emit_comment(self, text: str) -> None:
        """Emit a comment line.

        Args:
            text: The comment text (without # prefix).

        """
        self.emit(f"# {text}" if text else "#")

    def nested(self) -> "TextEmitter":
        """Get an emitter one indentation level deeper than this one."""
        return IndentedEmitter(self)


class IndentedEmitter(TextEmitter):
    """Emitter forwarding indented lines to a parent emitter."""

    def __init__(self, parent: TextEmitter) -> None:
        """Initialize an emitter nested inside ``parent``.

        Args:
            parent: Emitter receiving the indented lines.

        """
        self._parent = parent
        self.indent_str = parent.indent_str

    def emit(self, line: str) -> None:
        """Emit a line of text one level deeper than the parent."""
        self._parent.emit(f"{self.indent_str}{line}")

    def emit_blank(self) -> None:
        """Emit an empty line, never indented."""
        self._parent.emit_blank()

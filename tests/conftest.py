"""Shared fixtures for PDL tests."""

import pytest

from pdl.ast.nodes import Document
from pdl.parser import parse

# Every declaration kind and modifier, laid out exactly as the text renderer
# writes it, so rendering the parsed document reproduces this source.
SAMPLE_PDL = """\
# Copyright note
#
# Second line.

version
  major 1
  minor 3

experimental domain Accessibility
  depends on DOM
  depends on Runtime

  # Unique accessibility node identifier.
  type AXNodeId extends string

  # Enum of possible property types.
  type AXValueType extends string
    enum
      boolean
      # A tristate value.
      tristate
      booleanOrUndefined

  # A single source for a computed AX property.
  type AXValueSource extends object
    properties
      # What type of source this is.
      AXValueSourceType type
      optional AXValue value
      experimental deprecated optional array of array of number matrix

  optional type AXMaybe extends DOM.NodeId

  # Returns the DER-encoded certificate.
  experimental command getCertificate
    parameters
      # Origin to get certificate for.
      string origin
    returns
      array of string tableNames

  command hideHighlight
    # Use 'Overlay.hideHighlight' instead
    redirect Overlay

  deprecated command setMode
    parameters
      # Animation type of `Animation`.
      enum type
        CSSTransition
        CSSAnimation
        WebAnimation
      binary data

  # Notification sent after the virtual time has advanced.
  experimental event virtualTimeAdvanced
    parameters
      number virtualTimeElapsed

domain DOM

  type NodeId extends integer
"""


@pytest.fixture
def sample_source() -> str:
    """PDL source exercising every declaration kind."""
    return SAMPLE_PDL


@pytest.fixture
def sample_document() -> Document:
    """Document parsed from the sample source."""
    document, remainder = parse(SAMPLE_PDL)
    assert remainder == ""
    return document

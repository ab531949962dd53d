"""Error handling and diagnostics for the PDL parser.

Provide error codes, diagnostic messages, and rustc-style error formatting
for reporting parse errors with source context.
"""

from pdl.errors.codes import ErrorCode
from pdl.errors.diagnostics import Diagnostic, Severity
from pdl.errors.reporter import DiagnosticReporter

__all__ = [
    "Diagnostic",
    "DiagnosticReporter",
    "ErrorCode",
    "Severity",
]

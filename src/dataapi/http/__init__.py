"""HTTP infrastructure components."""

from .client import HttpTransport
from .diagnostics import DiagnosticSink, LoggingDiagnosticSink

__all__ = ["HttpTransport", "DiagnosticSink", "LoggingDiagnosticSink"]

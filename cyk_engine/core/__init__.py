"""Core data structures and utilities for cyk_engine."""

from cyk_engine.core.diagnostic import Diagnostic, DiagnosticSink, Severity
from cyk_engine.core.config import Config
from cyk_engine.core.report import Reporter

__all__ = ["Diagnostic", "DiagnosticSink", "Severity", "Config", "Reporter"]

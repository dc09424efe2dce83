"""Data structures for recording diagnostics raised while building grammars."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
}


@dataclass
class Diagnostic:
    """
    Represents a single non-fatal problem found in a grammar.

    Attributes:
        rule_id: Identifier of the check that produced this diagnostic
        severity: Severity level of the diagnostic
        message: Human-readable description of the issue
        source: Left-hand symbol of the offending production, if any
        target: Unsplit right-hand side of the offending production, if any
        suggestion: Optional hint for how to fix the grammar
    """
    rule_id: str
    severity: Severity
    message: str
    source: Optional[str] = None
    target: Optional[str] = None
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        """Format diagnostic as human-readable string."""
        result = f"{self.severity.value}: {self.rule_id}\n"
        result += f"    {self.message}"
        if self.suggestion:
            result += f"\n    Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict:
        """Convert diagnostic to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
            "target": self.target,
            "suggestion": self.suggestion,
        }

    @property
    def is_error(self) -> bool:
        """Check if this diagnostic is an error."""
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        """Check if this diagnostic is a warning."""
        return self.severity == Severity.WARNING


class DiagnosticSink:
    """
    Collects diagnostics emitted during grammar normalization.

    A sink is handed to the code that produces diagnostics instead of having
    that code write to shared state, so the producer stays a pure function of
    its inputs. Every recorded diagnostic is also forwarded to the module
    logger at a level matching its severity.
    """

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def record(self, diagnostic: Diagnostic) -> None:
        """Store a diagnostic and log it."""
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s: %s", diagnostic.rule_id, diagnostic.message)

    def by_rule(self, rule_id: str) -> List[Diagnostic]:
        """Return all diagnostics produced by the given check."""
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

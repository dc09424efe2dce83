"""
cyk-engine - Context-free grammar normalization and CYK membership recognition.

Raw productions are collected in a ``Grammar``, reduced to a binary
``NormalizedGrammar`` and checked against tokenized input by a ``Recognizer``.
"""

__version__ = "0.1.0"

from cyk_engine.core.diagnostic import Diagnostic, DiagnosticSink, Severity
from cyk_engine.core.config import Config
from cyk_engine.grammar import Grammar, NormalizedGrammar, NormalizedRule, Rule, SimpleRule
from cyk_engine.recognizer import RecognitionResult, RecognitionTable, Recognizer, SymbolIndex, recognize

__all__ = [
    "Config",
    "Diagnostic",
    "DiagnosticSink",
    "Grammar",
    "NormalizedGrammar",
    "NormalizedRule",
    "RecognitionResult",
    "RecognitionTable",
    "Recognizer",
    "Rule",
    "Severity",
    "SimpleRule",
    "SymbolIndex",
    "recognize",
    "__version__",
]

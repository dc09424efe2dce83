"""Report formatting and output for recognition results."""

import json
import sys
from collections import defaultdict
from typing import List, Optional, TextIO

from cyk_engine.core.diagnostic import Diagnostic, Severity
from cyk_engine.recognizer import RecognitionResult


class Reporter:
    """Formats and outputs recognition results in various formats."""

    def __init__(self, output_format: str = "text", show_table: bool = False):
        self.output_format = output_format
        self.show_table = show_table

    def report(self,
               result: RecognitionResult,
               diagnostics: List[Diagnostic],
               output: Optional[TextIO] = None) -> int:
        """
        Output the result and diagnostics in the configured format.

        Writes to the current ``sys.stdout`` when no stream is given.

        Returns:
            Exit code (0 if the input was recognized, 1 otherwise)
        """
        if output is None:
            output = sys.stdout

        if self.output_format == "json":
            self._report_json(result, diagnostics, output)
        else:
            self._report_text(result, diagnostics, output)

        return 0 if result.recognized else 1

    def _report_text(self, result: RecognitionResult, diagnostics: List[Diagnostic], output: TextIO):
        """Report in human-readable text format."""
        for diagnostic in diagnostics:
            output.write(str(diagnostic))
            output.write("\n")
        if diagnostics:
            self._write_summary(diagnostics, output)
            output.write("\n")

        tokens = " ".join(result.tokens)
        verdict = "recognized" if result.recognized else "not recognized"
        output.write(f"{verdict}: {result.start_symbol} =>* {tokens}\n")
        output.write(f"    {len(result.tokens)} tokens, {len(result.symbol_index)} nonterminals\n")

        if self.show_table:
            output.write("\n")
            self._write_table(result, output)

    def _write_table(self, result: RecognitionResult, output: TextIO):
        """Write every non-empty table cell, shortest substrings first."""
        cells = list(result.table.cells())
        if not cells:
            output.write("Table is empty.\n")
            return
        for length, start, symbols in cells:
            span = " ".join(result.tokens[start:start + length])
            output.write(f"P[{length}][{start}] = {{{', '.join(sorted(symbols))}}}  ({span})\n")

    def _write_summary(self, diagnostics: List[Diagnostic], output: TextIO):
        """Write summary of diagnostics."""
        counts = defaultdict(int)
        for diagnostic in diagnostics:
            counts[diagnostic.severity] += 1

        total = len(diagnostics)
        parts = []

        if counts[Severity.ERROR] > 0:
            parts.append(f"{counts[Severity.ERROR]} error{'s' if counts[Severity.ERROR] > 1 else ''}")
        if counts[Severity.WARNING] > 0:
            parts.append(f"{counts[Severity.WARNING]} warning{'s' if counts[Severity.WARNING] > 1 else ''}")

        output.write(f"{total} diagnostic{'s' if total != 1 else ''} ({', '.join(parts)})\n")

    def _report_json(self, result: RecognitionResult, diagnostics: List[Diagnostic], output: TextIO):
        """Report in JSON format."""
        data = {
            "recognized": result.recognized,
            "start_symbol": result.start_symbol,
            "tokens": list(result.tokens),
            "diagnostics": [d.to_dict() for d in diagnostics],
            "summary": {
                "tokens": len(result.tokens),
                "nonterminals": len(result.symbol_index),
                "errors": sum(1 for d in diagnostics if d.is_error),
                "warnings": sum(1 for d in diagnostics if d.is_warning),
            },
        }
        if self.show_table:
            data["table"] = [{
                "length": length, "start": start, "symbols": sorted(symbols)
            } for length, start, symbols in result.table.cells()]
        json.dump(data, output, indent=2)
        output.write("\n")

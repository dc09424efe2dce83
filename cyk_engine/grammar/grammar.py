"""
Raw and normalized grammar containers.

A ``Grammar`` accumulates productions exactly as the caller wrote them. It is
turned into a ``NormalizedGrammar`` once a start symbol and a splitter are
known; the normalized form keeps only productions with one or two right-hand
symbols, which is the shape the CYK recognizer works on.
"""

import logging
from collections import Counter
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from cyk_engine.core.diagnostic import Diagnostic, DiagnosticSink, Severity
from cyk_engine.grammar.rule import NormalizedRule, Rule, SimpleRule

logger = logging.getLogger(__name__)

Splitter = Callable[[str], Sequence[str]]


class NormalizedGrammar:
    """
    Grammar whose productions all have a target of length 1 or 2.

    Built once by ``Grammar.convert_to_normal_form`` and read-only afterwards.
    """

    def __init__(self, start_symbol: str, rules: Sequence[NormalizedRule] = ()):
        self.start_symbol = start_symbol
        self._rules: Tuple[NormalizedRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[NormalizedRule, ...]:
        """Productions in insertion order."""
        return self._rules

    def nonterminals(self) -> List[str]:
        """Distinct rule sources, in the order they are first seen."""
        seen = {}
        for rule in self._rules:
            seen.setdefault(rule.source, None)
        return list(seen)

    def terminal_rules(self) -> List[NormalizedRule]:
        return [r for r in self._rules if r.is_terminal]

    def binary_rules(self) -> List[NormalizedRule]:
        return [r for r in self._rules if r.is_binary]

    def __iter__(self) -> Iterator[NormalizedRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NormalizedGrammar):
            return NotImplemented
        return self.start_symbol == other.start_symbol and Counter(self._rules) == Counter(other._rules)

    def __repr__(self) -> str:
        return f"NormalizedGrammar(start_symbol={self.start_symbol!r}, rules={len(self._rules)})"


class Grammar:
    """
    Insertion-ordered collection of raw productions.

    Several productions may share a left-hand symbol. Rules are only ever
    appended.

    Example usage:
        grammar = Grammar()
        grammar.add_rule(SimpleRule("S", "A B"))
        normalized = grammar.convert_to_normal_form("S", str.split)
    """

    def __init__(self, rules: Sequence[Rule] = ()):
        self._rules: List[SimpleRule] = []
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        """Append a copy of ``rule``."""
        self._rules.append(SimpleRule(rule.source, rule.target))

    @property
    def rules(self) -> Tuple[SimpleRule, ...]:
        return tuple(self._rules)

    def __iter__(self) -> Iterator[SimpleRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def convert_to_normal_form(
        self,
        start_symbol: str,
        splitter: Splitter,
        diagnostics: Optional[DiagnosticSink] = None,
    ) -> NormalizedGrammar:
        """
        Split every rule target and keep the productions of length 1 or 2.

        Longer (or empty) productions are not binarized: they are dropped and
        an ``unsupported-production`` diagnostic is recorded. The raw grammar
        is left untouched.

        Args:
            start_symbol: Start symbol the normalized grammar is built for
            splitter: Tokenizer applied to each raw target
            diagnostics: Sink receiving diagnostics; a private one is used if omitted

        Returns:
            The normalized grammar
        """
        if diagnostics is None:
            diagnostics = DiagnosticSink()

        normalized: List[NormalizedRule] = []
        known_symbols = set()
        for rule in self._rules:
            target_chain = tuple(splitter(rule.target))
            known_symbols.add(rule.source)
            known_symbols.update(target_chain)

            if 1 <= len(target_chain) <= 2:
                normalized.append(NormalizedRule(rule.source, target_chain))
                continue

            diagnostics.record(
                Diagnostic(
                    rule_id="unsupported-production",
                    severity=Severity.ERROR,
                    message=f"unhandled source rule (len: {len(target_chain)}): {rule}",
                    source=rule.source,
                    target=rule.target,
                    suggestion="Rewrite the production with one or two right-hand symbols",
                ))

        logger.debug("known symbols: %s", sorted(known_symbols))

        if not any(r.source == start_symbol for r in normalized):
            diagnostics.record(
                Diagnostic(
                    rule_id="unknown-start-symbol",
                    severity=Severity.WARNING,
                    message=f"start symbol {start_symbol!r} has no usable production",
                    source=start_symbol,
                ))

        return NormalizedGrammar(start_symbol, normalized)

"""Tests for grammar containers and normalization."""

import pytest

from cyk_engine.core.diagnostic import DiagnosticSink, Severity
from cyk_engine.grammar import Grammar, NormalizedGrammar, NormalizedRule, SimpleRule


def _grammar(*rules):
    grammar = Grammar()
    for source, target in rules:
        grammar.add_rule(SimpleRule(source, target))
    return grammar


def test_normalized_rules_have_one_or_two_symbols():
    """Every surviving production has a target of length 1 or 2."""
    grammar = _grammar(
        ("S", "A B"),
        ("S", "A B C"),
        ("A", "a"),
        ("B", ""),
        ("C", "c c c c"),
    )

    normalized = grammar.convert_to_normal_form("S", str.split)

    assert len(normalized) == 2
    for rule in normalized:
        assert 1 <= len(rule.target) <= 2


def test_three_symbol_rule_is_dropped_with_diagnostic():
    """A production with three right-hand symbols is skipped and reported."""
    grammar = _grammar(("S", "A B C"), ("S", "A B"), ("A", "a"), ("B", "b"), ("C", "c"))
    sink = DiagnosticSink()

    normalized = grammar.convert_to_normal_form("S", str.split, sink)

    assert all(rule.target != ("A", "B", "C") for rule in normalized)
    assert NormalizedRule("S", ("A", "B")) in normalized.rules

    dropped = sink.by_rule("unsupported-production")
    assert len(dropped) == 1
    assert dropped[0].severity == Severity.ERROR
    assert dropped[0].source == "S"
    assert dropped[0].target == "A B C"
    assert "len: 3" in dropped[0].message
    assert sink.has_errors


def test_empty_target_is_dropped():
    grammar = _grammar(("S", "   "), ("S", "a"))
    sink = DiagnosticSink()

    normalized = grammar.convert_to_normal_form("S", str.split, sink)

    assert normalized.rules == (NormalizedRule("S", ("a",)),)
    assert "len: 0" in sink.by_rule("unsupported-production")[0].message


def test_dropped_rules_do_not_stop_normalization():
    grammar = _grammar(("S", "A B C D"), ("A", "a"), ("S", "x y z"), ("B", "b"))
    sink = DiagnosticSink()

    normalized = grammar.convert_to_normal_form("S", str.split, sink)

    assert [r.source for r in normalized] == ["A", "B"]
    assert len(sink.by_rule("unsupported-production")) == 2


def test_unknown_start_symbol_is_a_warning():
    """A start symbol without productions is reported but not rejected."""
    grammar = _grammar(("A", "a"))
    sink = DiagnosticSink()

    normalized = grammar.convert_to_normal_form("S", str.split, sink)

    assert len(normalized) == 1
    warnings = sink.by_rule("unknown-start-symbol")
    assert len(warnings) == 1
    assert warnings[0].severity == Severity.WARNING
    assert not sink.has_errors


def test_normalization_without_sink():
    grammar = _grammar(("S", "A B C"))

    normalized = grammar.convert_to_normal_form("S", str.split)

    assert len(normalized) == 0


def test_normalization_is_idempotent():
    """Converting the same grammar twice yields the same rule multiset."""
    grammar = _grammar(("S", "A B"), ("S", "A B"), ("A", "a"), ("B", "b"), ("S", "A A A"))

    first = grammar.convert_to_normal_form("S", str.split)
    second = grammar.convert_to_normal_form("S", str.split)

    assert first == second
    assert first.rules == second.rules


def test_normalization_does_not_mutate_raw_grammar():
    grammar = _grammar(("S", "A B C"), ("A", "a"))
    before = grammar.rules

    grammar.convert_to_normal_form("S", str.split)

    assert grammar.rules == before
    assert len(grammar) == 2


def test_add_rule_copies_values():
    """The grammar keeps its own copy of each rule."""

    class MutableRule:

        def __init__(self, source, target):
            self.source = source
            self.target = target

    rule = MutableRule("S", "a")
    grammar = Grammar()
    grammar.add_rule(rule)
    rule.target = "b"

    assert grammar.rules == (SimpleRule("S", "a"),)


def test_normalized_grammar_is_detached_from_raw_grammar():
    grammar = _grammar(("S", "a"))
    normalized = grammar.convert_to_normal_form("S", str.split)

    grammar.add_rule(SimpleRule("S", "b"))

    assert len(normalized) == 1


def test_duplicate_sources_are_kept_in_order():
    grammar = _grammar(("S", "a"), ("T", "t"), ("S", "b"))

    normalized = grammar.convert_to_normal_form("S", str.split)

    assert [str(r) for r in normalized] == ["S -> a", "T -> t", "S -> b"]
    assert normalized.nonterminals() == ["S", "T"]


def test_terminal_and_binary_rule_views():
    grammar = _grammar(("S", "A B"), ("A", "a"), ("B", "b"))

    normalized = grammar.convert_to_normal_form("S", str.split)

    assert [r.source for r in normalized.terminal_rules()] == ["A", "B"]
    assert [r.source for r in normalized.binary_rules()] == ["S"]
    assert normalized.start_symbol == "S"


def test_normalized_grammar_equality_ignores_order():
    a = NormalizedGrammar("S", [NormalizedRule("S", ("a",)), NormalizedRule("S", ("b",))])
    b = NormalizedGrammar("S", [NormalizedRule("S", ("b",)), NormalizedRule("S", ("a",))])
    c = NormalizedGrammar("T", [NormalizedRule("S", ("b",)), NormalizedRule("S", ("a",))])

    assert a == b
    assert a != c


def test_custom_splitter_is_used_for_targets():
    grammar = _grammar(("e", "HF"), ("H", "HO"))

    normalized = grammar.convert_to_normal_form("e", lambda s: list(s))

    assert [r.target for r in normalized] == [("H", "F"), ("H", "O")]


def test_empty_source_is_rejected():
    with pytest.raises(ValueError):
        SimpleRule("", "a")


def test_normalized_rule_length_is_checked():
    with pytest.raises(ValueError):
        NormalizedRule("S", ("A", "B", "C"))
    with pytest.raises(ValueError):
        NormalizedRule("S", ())

"""Tests for rule parsing and grammar file loading."""

import pytest

from cyk_engine.grammar import SimpleRule
from cyk_engine.loader import (GrammarFileError, RuleSyntaxError, load, load_grammar_yaml, load_problem, parse_problem,
                               parse_rule)


def test_parse_rule():
    assert parse_rule("Ca => PRnFAr") == SimpleRule("Ca", "PRnFAr")
    assert parse_rule("S => A B") == SimpleRule("S", "A B")


@pytest.mark.parametrize("line", ["", "S -> A B", "S => ", "S=>A", "S => A1", "HOHOHO"])
def test_parse_rule_rejects(line):
    with pytest.raises(RuleSyntaxError):
        parse_rule(line)


def test_parse_problem():
    problem = parse_problem("e => H\ne => O\nH => HO\n\nHOH\n")

    assert [str(r) for r in problem.grammar] == ["e => H", "e => O", "H => HO"]
    assert problem.input_text == "HOH"
    assert problem.start_symbol is None


def test_parse_problem_last_input_wins():
    problem = parse_problem("S => A B\nfirst\nsecond\n")
    assert problem.input_text == "second"


def test_load_problem(tmp_path):
    path = tmp_path / "molecule.txt"
    path.write_text("e => HF\nH => HO\n\nHOF\n")

    problem = load_problem(path)

    assert len(problem.grammar) == 2
    assert problem.input_text == "HOF"
    assert load(path).input_text == "HOF"


def test_load_grammar_yaml(tmp_path):
    path = tmp_path / "grammar.yaml"
    path.write_text("""
version: 1
start: S
splitter: whitespace
input: a b
rules:
  - {source: S, target: A B}
  - {source: A, target: [a]}
  - "B => b"
""")

    problem = load_grammar_yaml(path)

    assert problem.grammar.rules == (SimpleRule("S", "A B"), SimpleRule("A", "a"), SimpleRule("B", "b"))
    assert problem.start_symbol == "S"
    assert problem.splitter == "whitespace"
    assert problem.input_text == "a b"
    assert load(path).grammar.rules == problem.grammar.rules


@pytest.mark.parametrize(
    "content, message",
    [
        ("version: 2\nrules: []\n", "Unsupported grammar version"),
        ("version: 1\n", "Missing required key 'rules'"),
        ("version: 1\nrules: {S: a}\n", "'rules' must be a list"),
        ("version: 1\nrules:\n  - 3\n", "rules\\[0\\]"),
        ("version: 1\nrules:\n  - {source: S}\n", "'source' and 'target'"),
        ("version: 1\nrules:\n  - {source: '', target: a}\n", "non-empty"),
        ("version: 1\nrules:\n  - 'S -> a'\n", "not a rule"),
        ("- just a list\n", "top level"),
        ("version: 1\ninput: [a, b]\nrules: []\n", "'input' must be a string"),
    ],
)
def test_load_grammar_yaml_errors(tmp_path, content, message):
    path = tmp_path / "bad.yml"
    path.write_text(content)

    with pytest.raises(GrammarFileError, match=message):
        load_grammar_yaml(path)


@pytest.mark.parametrize("input_line", ["input:\n", ""])
def test_load_grammar_yaml_without_input(tmp_path, input_line):
    path = tmp_path / "grammar.yaml"
    path.write_text(f"version: 1\n{input_line}rules:\n  - S => A B\n")

    problem = load_grammar_yaml(path)

    assert problem.input_text == ""

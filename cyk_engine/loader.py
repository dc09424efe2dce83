"""
Loading grammars from files.

Two formats are understood:

- Text problem files: one ``A => B C`` rule per line; any other non-blank
  line is the input to recognize.
- YAML grammar files (``version: 1``) with a ``rules`` list and optional
  ``start``, ``splitter`` and ``input`` keys.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from cyk_engine.grammar.grammar import Grammar
from cyk_engine.grammar.rule import SimpleRule

logger = logging.getLogger(__name__)

_RULE_RE = re.compile(r"^(?P<source>[a-zA-Z]+) => (?P<target>[a-zA-Z ]+)$")

_SUPPORTED_VERSION = 1


class RuleSyntaxError(ValueError):
    """A line does not have the ``A => B C`` shape."""


class GrammarFileError(ValueError):
    """A YAML grammar file is malformed."""


@dataclass
class Problem:
    """
    A grammar together with the input to check against it.

    Attributes:
        grammar: Raw rules in file order
        input_text: Unsplit input string ("" if the file has none)
        start_symbol: Start symbol named by the file, if any
        splitter: Splitter name named by the file, if any
    """
    grammar: Grammar
    input_text: str = ""
    start_symbol: Optional[str] = None
    splitter: Optional[str] = None


def parse_rule(line: str) -> SimpleRule:
    """Parse a ``source => target`` line."""
    match = _RULE_RE.match(line)
    if match is None:
        raise RuleSyntaxError(f"not a rule: {line!r}")
    return SimpleRule(match.group("source"), match.group("target"))


def parse_problem(text: str) -> Problem:
    """Parse the contents of a text problem file."""
    problem = Problem(grammar=Grammar())
    for line in text.splitlines():
        try:
            problem.grammar.add_rule(parse_rule(line))
            continue
        except RuleSyntaxError:
            pass
        line = line.strip()
        if not line:
            continue
        if problem.input_text:
            logger.warning("input %r replaced by %r", problem.input_text, line)
        problem.input_text = line
    return problem


def load_problem(path: Union[str, Path]) -> Problem:
    """Load a text problem file."""
    path = Path(path)
    problem = parse_problem(path.read_text(encoding="utf-8"))
    logger.info("loaded %d rules from %s", len(problem.grammar), path)
    return problem


def load_grammar_yaml(path: Union[str, Path]) -> Problem:
    """
    Load a YAML grammar file.

    Rules may be given as ``{source, target}`` mappings or as ``"A => B C"``
    strings.

    Raises:
        GrammarFileError: If the version is unsupported or an entry is malformed.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        spec = yaml.safe_load(f)

    if not isinstance(spec, dict):
        raise GrammarFileError(f"{path}: expected a mapping at top level, got {type(spec).__name__}")

    version = spec.get("version")
    if version != _SUPPORTED_VERSION:
        raise GrammarFileError(f"Unsupported grammar version {version!r} in {path} "
                               f"(expected {_SUPPORTED_VERSION})")

    if "rules" not in spec:
        raise GrammarFileError(f"Missing required key 'rules' in {path}")
    if not isinstance(spec["rules"], list):
        raise GrammarFileError(f"{path}: 'rules' must be a list, got {type(spec['rules']).__name__}")

    grammar = Grammar()
    for idx, entry in enumerate(spec["rules"]):
        if isinstance(entry, str):
            try:
                grammar.add_rule(parse_rule(entry))
            except RuleSyntaxError as e:
                raise GrammarFileError(f"{path}: rules[{idx}]: {e}") from e
            continue

        if not isinstance(entry, dict):
            raise GrammarFileError(f"{path}: rules[{idx}]: expected a mapping or a rule string, "
                                   f"got {type(entry).__name__}")
        if "source" not in entry or "target" not in entry:
            raise GrammarFileError(f"{path}: rules[{idx}]: each rule must have 'source' and 'target' keys, "
                                   f"got keys: {sorted(entry.keys())}")
        source, target = entry["source"], entry["target"]
        if isinstance(target, list):
            target = " ".join(str(t) for t in target)
        try:
            grammar.add_rule(SimpleRule(str(source), str(target)))
        except ValueError as e:
            raise GrammarFileError(f"{path}: rules[{idx}]: {e}") from e

    input_text = spec.get("input")
    if input_text is None:
        input_text = ""
    if not isinstance(input_text, str):
        raise GrammarFileError(f"{path}: 'input' must be a string, got {type(input_text).__name__}")

    logger.info("loaded %d rules from %s", len(grammar), path)
    return Problem(
        grammar=grammar,
        input_text=input_text,
        start_symbol=spec.get("start"),
        splitter=spec.get("splitter"),
    )


def load(path: Union[str, Path]) -> Problem:
    """Load a problem, picking the format from the file suffix."""
    path = Path(path)
    if path.suffix in (".yaml", ".yml"):
        return load_grammar_yaml(path)
    return load_problem(path)

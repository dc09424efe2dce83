"""Grammar containers and production rules."""

from cyk_engine.grammar.grammar import Grammar, NormalizedGrammar, Splitter
from cyk_engine.grammar.rule import NormalizedRule, Rule, SimpleRule

__all__ = ["Grammar", "NormalizedGrammar", "NormalizedRule", "Rule", "SimpleRule", "Splitter"]

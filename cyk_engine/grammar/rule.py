"""Production rules as seen by the grammar containers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple


class Rule(ABC):
    """
    A production ``source -> target`` whose right-hand side is still unsplit.

    Any object exposing these two accessors can be added to a ``Grammar``;
    how the rule was written down (text line, YAML entry, ...) is the
    caller's business.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Left-hand symbol."""

    @property
    @abstractmethod
    def target(self) -> str:
        """Raw right-hand side, to be tokenized by a splitter."""

    def __str__(self) -> str:
        return f"{self.source} => {self.target}"


class SimpleRule(Rule):
    """Plain ``(source, target)`` pair."""

    __slots__ = ("_source", "_target")

    def __init__(self, source: str, target: str):
        if not source:
            raise ValueError(f"rule source must be non-empty (target: {target!r})")
        self._source = source
        self._target = target

    @property
    def source(self) -> str:
        return self._source

    @property
    def target(self) -> str:
        return self._target

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimpleRule):
            return NotImplemented
        return (self._source, self._target) == (other._source, other._target)

    def __hash__(self) -> int:
        return hash((self._source, self._target))

    def __repr__(self) -> str:
        return f"SimpleRule(source={self._source!r}, target={self._target!r})"


@dataclass(frozen=True)
class NormalizedRule:
    """
    A production restricted to one or two right-hand symbols.

    A length-1 target is a terminal production; a length-2 target names two
    nonterminals.
    """
    source: str
    target: Tuple[str, ...]

    def __post_init__(self):
        if not 1 <= len(self.target) <= 2:
            raise ValueError(f"normalized rule {self.source!r} must have 1 or 2 target symbols, "
                             f"got {len(self.target)}")

    @property
    def is_terminal(self) -> bool:
        return len(self.target) == 1

    @property
    def is_binary(self) -> bool:
        return len(self.target) == 2

    def __str__(self) -> str:
        return f"{self.source} -> {' '.join(self.target)}"

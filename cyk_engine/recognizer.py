"""
CYK membership recognizer.

Decides whether a token sequence is derivable from a start symbol under a
``NormalizedGrammar`` by filling a boolean table bottom-up over substring
lengths (Cocke-Younger-Kasami).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from cyk_engine.grammar.grammar import NormalizedGrammar, Splitter

logger = logging.getLogger(__name__)


class SymbolIndex:
    """
    Dense numbering of the nonterminals of a normalized grammar.

    Every symbol that is the source of some rule gets an index in
    ``[0, len(index))``. Assignment order is first discovery; callers must
    not rely on particular values.
    """

    def __init__(self, grammar: NormalizedGrammar):
        self._index: Dict[str, int] = {}
        for rule in grammar.rules:
            if rule.source not in self._index:
                self._index[rule.source] = len(self._index)
        self._symbols: List[str] = list(self._index)

    def get(self, symbol: str) -> Optional[int]:
        return self._index.get(symbol)

    def __getitem__(self, symbol: str) -> int:
        return self._index[symbol]

    def symbol(self, idx: int) -> str:
        return self._symbols[idx]

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolIndex({self._index!r})"


class RecognitionTable:
    """
    Boolean chart ``P[length][start][idx]``.

    ``P[length][start][idx]`` is true iff nonterminal ``idx`` derives exactly
    the ``length`` tokens beginning at ``start``. Row 0 is unused so lengths
    index directly.
    """

    def __init__(self, num_tokens: int, symbol_index: SymbolIndex):
        self.num_tokens = num_tokens
        self.symbol_index = symbol_index
        width = len(symbol_index)
        self._cells: List[List[List[bool]]] = [[]] + [[[False] * width for _ in range(num_tokens - length + 1)]
                                                      for length in range(1, num_tokens + 1)]

    def __getitem__(self, length: int) -> List[List[bool]]:
        if not 1 <= length <= self.num_tokens:
            raise IndexError(f"length {length} outside 1..{self.num_tokens}")
        return self._cells[length]

    def mark(self, length: int, start: int, idx: int) -> None:
        self._cells[length][start][idx] = True

    def derives(self, symbol: str, start: int, length: int) -> bool:
        """Whether ``symbol`` derives the ``length`` tokens beginning at ``start``."""
        idx = self.symbol_index.get(symbol)
        if idx is None or not 1 <= length <= self.num_tokens or not 0 <= start <= self.num_tokens - length:
            return False
        return self._cells[length][start][idx]

    def derivable(self, start: int, length: int) -> Set[str]:
        """All nonterminals deriving the given substring."""
        row = self[length][start]
        return {self.symbol_index.symbol(i) for i, hit in enumerate(row) if hit}

    def cells(self) -> Iterator[Tuple[int, int, Set[str]]]:
        """Yield ``(length, start, symbols)`` for every non-empty cell."""
        for length in range(1, self.num_tokens + 1):
            for start in range(self.num_tokens - length + 1):
                symbols = self.derivable(start, length)
                if symbols:
                    yield length, start, symbols


@dataclass
class RecognitionResult:
    """Outcome of a single recognition run."""
    recognized: bool
    start_symbol: str
    tokens: Tuple[str, ...]
    table: RecognitionTable
    symbol_index: SymbolIndex

    def __bool__(self) -> bool:
        return self.recognized


class Recognizer:
    """
    Runs CYK recognition against a normalized grammar.

    Example usage:
        recognizer = Recognizer(normalized, "S")
        result = recognizer.recognize(["a", "b"])
        if result.recognized:
            ...
    """

    def __init__(self, grammar: NormalizedGrammar, start_symbol: Optional[str] = None):
        self.grammar = grammar
        self.start_symbol = start_symbol if start_symbol is not None else grammar.start_symbol

    def recognize_text(self, text: str, splitter: Splitter) -> RecognitionResult:
        """Tokenize ``text`` with ``splitter`` and recognize the result."""
        return self.recognize(splitter(text))

    def recognize(self, tokens: Sequence[str]) -> RecognitionResult:
        """
        Fill the recognition table for ``tokens``.

        An empty token sequence and a start symbol without productions both
        yield ``recognized=False``; neither raises.
        """
        tokens = tuple(tokens)
        n = len(tokens)
        symbol_index = SymbolIndex(self.grammar)
        table = RecognitionTable(n, symbol_index)

        logger.debug("nonterms: %s", symbol_index)
        logger.debug("words: %s", tokens)

        if n == 0:
            return RecognitionResult(False, self.start_symbol, tokens, table, symbol_index)

        terminal_rules = self.grammar.terminal_rules()
        # Binary rules whose two targets have an index; others can never fire.
        binary_rules = [(symbol_index[r.source], symbol_index[r.target[0]], symbol_index[r.target[1]])
                        for r in self.grammar.binary_rules()
                        if r.target[0] in symbol_index and r.target[1] in symbol_index]

        for s, word in enumerate(tokens):
            for rule in terminal_rules:
                if rule.target[0] == word:
                    v = symbol_index[rule.source]
                    logger.debug("%s: %s => P[1, %d, %d] = true", word, rule, s, v)
                    table.mark(1, s, v)

        for length in range(2, n + 1):
            row = table[length]
            for s in range(n - length + 1):
                cell = row[s]
                for k in range(1, length):
                    left = table[k][s]
                    right = table[length - k][s + k]
                    for a, b, c in binary_rules:
                        if left[b] and right[c]:
                            cell[a] = True

        start_idx = symbol_index.get(self.start_symbol)
        recognized = start_idx is not None and table[n][0][start_idx]
        logger.debug("%s derives %d tokens: %s", self.start_symbol, n, recognized)
        return RecognitionResult(recognized, self.start_symbol, tokens, table, symbol_index)


def recognize(grammar: NormalizedGrammar, start_symbol: str, tokens: Sequence[str]) -> bool:
    """Return True iff ``tokens`` is derivable from ``start_symbol``."""
    return Recognizer(grammar, start_symbol).recognize(tokens).recognized

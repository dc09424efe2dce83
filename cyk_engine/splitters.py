"""
Built-in splitters.

A splitter turns a raw symbol string (a rule target or the input line) into
the ordered list of symbols the grammar works on. Splitters must be pure and
deterministic. Any callable with that contract can be passed to the engine;
the ones registered here are selectable by name from the command line and
the config file.
"""

import re
from typing import Callable, Dict, List

# A leading run without uppercase letters, or one uppercase letter followed by
# everything up to the next one ("CaF" -> "Ca", "F"; "eH2O" -> "e", "H2", "O").
_ELEMENT_RE = re.compile(r"^[^A-Z]+|[A-Z][^A-Z]*")


def element_splitter(text: str) -> List[str]:
    """Split chemical-formula style strings into element symbols."""
    return _ELEMENT_RE.findall("".join(text.split()))


def whitespace_splitter(text: str) -> List[str]:
    """Split on runs of whitespace."""
    return text.split()


def char_splitter(text: str) -> List[str]:
    """One symbol per non-whitespace character."""
    return [c for c in text if not c.isspace()]


SPLITTER_REGISTRY: Dict[str, dict] = {
    "element": {
        "func": element_splitter,
        "description": "Tokens start at an uppercase letter and absorb the characters up to the next one",
    },
    "whitespace": {
        "func": whitespace_splitter,
        "description": "Tokens are separated by whitespace",
    },
    "char": {
        "func": char_splitter,
        "description": "Every non-whitespace character is a token",
    },
}


def get_splitter(name: str) -> Callable[[str], List[str]]:
    """Look up a registered splitter by name."""
    try:
        return SPLITTER_REGISTRY[name]["func"]
    except KeyError:
        raise KeyError(f"unknown splitter {name!r} (available: {', '.join(sorted(SPLITTER_REGISTRY))})") from None


def list_splitters() -> Dict[str, dict]:
    """List all available splitters."""
    return SPLITTER_REGISTRY

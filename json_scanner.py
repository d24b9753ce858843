# json_scanner.py
# Character-level scanner feeding the recursive-descent parser.
#
# =============================================================================
#  SCANNER: ONE CHARACTER AT A TIME
# =============================================================================
#
# The parser never sees tokens. It asks the scanner for the next significant
# character and decides which rule to run from that single character. The
# scanner owns the read position, so every parse gets its own counter instead
# of sharing one between calls.
# =============================================================================

from typing import List, TextIO

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
END_OF_INPUT = ""                      # what TextIO.read(1) returns at EOF
WHITESPACE   = frozenset(" \t\n\r")


def is_whitespace(ch: str) -> bool:
    """True for space, tab, newline and carriage return only."""
    return ch in WHITESPACE


class Scanner:
    """
    Reads a character stream one character at a time.

    `position` counts every character consumed so far, skipped whitespace
    included. A single character can be pushed back with `unread`; the
    position moves back with it.
    """
    def __init__(self, source: TextIO):
        self._source = source
        self._pushback: List[str] = []
        self._last = END_OF_INPUT
        self.position = 0

    def read(self) -> str:
        if self._pushback:
            ch = self._pushback.pop()
        else:
            ch = self._source.read(1)
        if ch != END_OF_INPUT:
            self.position += 1
        self._last = ch
        return ch

    @property
    def offset(self) -> int:
        """0-based index of the last character read, or the input length at end of input."""
        if self._last == END_OF_INPUT:
            return self.position
        return self.position - 1

    def unread(self, ch: str) -> None:
        if ch == END_OF_INPUT:
            return
        if self._pushback:
            raise RuntimeError("scanner supports a single character of pushback")
        self._pushback.append(ch)
        self.position -= 1

    def next_non_whitespace(self) -> str:
        ch = self.read()
        while is_whitespace(ch):
            ch = self.read()
        return ch

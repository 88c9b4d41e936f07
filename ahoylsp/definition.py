"""Go-to-definition support."""

from __future__ import annotations

from typing import Optional

from .document import Document
from .protocol import Location, Position, Range

_MAX_LINE_LENGTH = 10000


def is_word_char(ch: str) -> bool:
    """Whether ``ch`` can be part of an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9") or ch == "_"


def get_word_at_position(doc: Optional[Document], line: int, character: int) -> str:
    """Return the identifier touching a zero-based position, or an empty string."""
    if doc is None or doc.lines is None:
        return ""
    if not 0 <= line < len(doc.lines):
        return ""
    text = doc.lines[line]
    if not 0 <= character < len(text):
        return ""
    if len(text) > _MAX_LINE_LENGTH:
        return ""

    start = character
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    end = character
    while end < len(text) and is_word_char(text[end]):
        end += 1
    return text[start:end]


def find_definition(doc: Optional[Document], line: int, character: int) -> Optional[Location]:
    """Location where the symbol under the cursor is declared, if known."""
    if doc is None or doc.symbol_table is None:
        return None
    word = get_word_at_position(doc, line, character)
    if not word:
        return None
    symbol = doc.symbol_table.lookup(word)
    if symbol is None:
        return None
    return Location(
        uri=doc.uri,
        range=Range(
            Position(symbol.line - 1, symbol.column),
            Position(symbol.line - 1, symbol.column + len(symbol.name)),
        ),
    )
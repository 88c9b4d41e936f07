"""An open text document together with its analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .ast import ASTNode, ParseError
from .symbol_table import SymbolTable, build_symbol_table

MAX_DOCUMENT_SIZE = 5_000_000


class DocumentTooLargeError(ValueError):
    """Raised when a document exceeds the size the server will analyse."""


@dataclass
class Document:
    uri: str
    content: str = ""
    lines: list[str] = field(default_factory=list)
    version: int = 0
    ast: Optional[ASTNode] = None
    errors: list[ParseError] = field(default_factory=list)
    symbol_table: SymbolTable = field(default_factory=SymbolTable)

    def line_text(self, line_number: int) -> str:
        """Text of a 1-based line, or an empty string when out of range."""
        if 0 < line_number <= len(self.lines):
            return self.lines[line_number - 1]
        return ""


def open_document(
    uri: str,
    text: str,
    ast: Optional[ASTNode] = None,
    errors: Iterable[ParseError] = (),
    version: int = 0,
) -> Document:
    """Create a document from its text and parse results, building its symbol table."""
    if len(text.encode("utf-8")) > MAX_DOCUMENT_SIZE:
        raise DocumentTooLargeError("file too large")
    return Document(
        uri=uri,
        content=text,
        lines=text.split("\n"),
        version=version,
        ast=ast,
        errors=list(errors),
        symbol_table=build_symbol_table(ast),
    )
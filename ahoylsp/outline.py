"""Document outline: symbols shown in the editor's symbol list."""

from __future__ import annotations

from .protocol import DocumentSymbol, LspSymbolKind, Position, Range
from .symbol_table import Symbol, SymbolKind, SymbolTable

_OUTLINE_KINDS = frozenset(
    {
        SymbolKind.FUNCTION,
        SymbolKind.ENUM,
        SymbolKind.STRUCT,
        SymbolKind.CONSTANT,
        SymbolKind.VARIABLE,
    }
)

_CHILD_KINDS = frozenset({SymbolKind.PARAMETER, SymbolKind.ENUM_VALUE, SymbolKind.STRUCT_FIELD})

_KIND_MAP = {
    SymbolKind.FUNCTION: LspSymbolKind.FUNCTION,
    SymbolKind.VARIABLE: LspSymbolKind.VARIABLE,
    SymbolKind.PARAMETER: LspSymbolKind.VARIABLE,
    SymbolKind.ENUM: LspSymbolKind.ENUM,
    SymbolKind.ENUM_VALUE: LspSymbolKind.ENUM_MEMBER,
    SymbolKind.STRUCT: LspSymbolKind.STRUCT,
    SymbolKind.STRUCT_FIELD: LspSymbolKind.FIELD,
    SymbolKind.CONSTANT: LspSymbolKind.CONSTANT,
}


def document_symbols(symbol_table: SymbolTable) -> list[DocumentSymbol]:
    """Flat list of the outline symbols in a table."""
    return [
        symbol_to_document_symbol(sym)
        for sym in symbol_table.get_all_symbols()
        if should_include_in_outline(sym)
    ]


def should_include_in_outline(sym: Symbol) -> bool:
    return sym.kind in _OUTLINE_KINDS


def should_include_as_child(sym: Symbol) -> bool:
    return sym.kind in _CHILD_KINDS


def symbol_to_document_symbol(sym: Symbol) -> DocumentSymbol:
    span = Range(
        Position(sym.line - 1, sym.column),
        Position(sym.line - 1, sym.column + len(sym.name)),
    )
    return DocumentSymbol(
        name=sym.name,
        kind=symbol_kind_to_protocol(sym.kind),
        range=span,
        selection_range=span,
        detail=sym.type or None,
    )


def symbol_kind_to_protocol(kind: SymbolKind) -> LspSymbolKind:
    return _KIND_MAP.get(kind, LspSymbolKind.VARIABLE)
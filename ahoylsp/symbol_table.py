"""Scoped symbol table built from an Ahoy syntax tree."""

from __future__ import annotations

import enum
import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .ast import ASTNode, NodeType

log = logging.getLogger(__name__)

_MAX_WALK_DEPTH = 1000
_MAX_CHILDREN = 1000
_MAX_SYMBOLS = 1000
_MAX_REFERENCE_DEPTH = 500
_MAX_REFERENCES = 100

_BLOCK_TYPES = frozenset(
    {
        NodeType.IF_STATEMENT,
        NodeType.WHILE_LOOP,
        NodeType.FOR_LOOP,
        NodeType.FOR_RANGE_LOOP,
        NodeType.FOR_COUNT_LOOP,
        NodeType.FOR_IN_ARRAY_LOOP,
        NodeType.FOR_IN_DICT_LOOP,
    }
)


class SymbolKind(enum.IntEnum):
    VARIABLE = 0
    FUNCTION = 1
    PARAMETER = 2
    ENUM = 3
    ENUM_VALUE = 4
    STRUCT = 5
    STRUCT_FIELD = 6
    CONSTANT = 7


@dataclass
class StructField:
    """A struct field, or a nested type holding its own fields."""

    name: str
    type: str = ""
    fields: Optional[dict[str, StructField]] = None


@dataclass
class Symbol:
    """A named entity declared in the code; ``line`` is 1-based."""

    name: str
    kind: SymbolKind
    type: str = ""
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    fields: Optional[dict[str, StructField]] = None


@dataclass(eq=False)
class Scope:
    """A lexical scope."""

    parent: Optional[Scope] = field(default=None, repr=False)
    symbols: dict[str, Symbol] = field(default_factory=dict)
    children: list[Scope] = field(default_factory=list)
    start_line: int = 0
    end_line: int = 0

    def add_symbol(self, symbol: Symbol) -> None:
        self.symbols[symbol.name] = symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find a symbol here or in an enclosing scope."""
        scope: Optional[Scope] = self
        while scope is not None:
            sym = scope.symbols.get(name)
            if sym is not None:
                return sym
            scope = scope.parent
        return None

    def lookup_local(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)


@dataclass(frozen=True)
class Reference:
    """Where an identifier is used; ``line`` is 1-based."""

    line: int
    column: int = 0


class SymbolTable:
    """All symbols of a document, arranged in nested scopes."""

    def __init__(self) -> None:
        self.global_scope = Scope()
        self.current_scope = self.global_scope

    def clear(self) -> None:
        """Discard every symbol and scope."""
        self.global_scope = Scope()
        self.current_scope = self.global_scope

    def enter_scope(self) -> None:
        scope = Scope(parent=self.current_scope)
        self.current_scope.children.append(scope)
        self.current_scope = scope

    def exit_scope(self) -> None:
        if self.current_scope.parent is not None:
            self.current_scope = self.current_scope.parent

    def add_symbol(self, symbol: Symbol) -> None:
        self.current_scope.add_symbol(symbol)

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.current_scope.lookup(name)

    def find_symbol_at_position(self, line: int, column: int) -> Optional[Symbol]:
        return self._find_in_scope(self.global_scope, line, column)

    def _find_in_scope(self, scope: Scope, line: int, column: int) -> Optional[Symbol]:
        for sym in scope.symbols.values():
            if sym.line == line and sym.column <= column < sym.column + len(sym.name):
                return sym
        for child in scope.children:
            if child.start_line <= line <= child.end_line:
                found = self._find_in_scope(child, line, column)
                if found is not None:
                    return found
        return None

    def get_struct_fields(self, type_name: str) -> Optional[dict[str, StructField]]:
        """Return the fields of a struct type, including inherited ones for nested types."""
        sym = self.lookup(type_name)
        if sym is None or sym.kind is not SymbolKind.STRUCT:
            return None

        if "." not in type_name:
            return dict(sym.fields or {})

        fields: dict[str, StructField] = {}
        parts = type_name.split(".")
        if len(parts) == 2:
            parent_name, child_name = parts
            parent = self.lookup(parent_name)
            if parent is not None and parent.kind is SymbolKind.STRUCT:
                parent_fields = parent.fields or {}
                fields.update(
                    (name, f) for name, f in parent_fields.items() if "." not in f.type
                )
                nested = parent_fields.get(child_name)
                if nested is not None:
                    fields.update(nested.fields or {})
        return fields

    def get_all_symbols(self) -> list[Symbol]:
        """Return the symbols of every scope, capped to keep memory bounded."""
        return list(itertools.islice(self._iter_symbols(self.global_scope), _MAX_SYMBOLS + 1))

    def _iter_symbols(self, scope: Scope) -> Iterator[Symbol]:
        yield from scope.symbols.values()
        for child in scope.children:
            yield from self._iter_symbols(child)

    def find_references(self, symbol_name: str, ast: Optional[ASTNode]) -> list[Reference]:
        """Find the identifiers in ``ast`` that name ``symbol_name``."""
        found: list[Reference] = []
        self._find_references(ast, symbol_name, found, 0)
        return found

    def _find_references(
        self, node: Optional[ASTNode], name: str, found: list[Reference], depth: int
    ) -> None:
        if node is None or depth > _MAX_REFERENCE_DEPTH or len(found) > _MAX_REFERENCES:
            return
        if node.type is NodeType.IDENTIFIER and node.value == name:
            found.append(Reference(node.line))
            if len(found) > _MAX_REFERENCES:
                return
        if len(node.children) > _MAX_CHILDREN:
            return
        for child in node.children:
            self._find_references(child, name, found, depth + 1)

    def _walk(self, node: Optional[ASTNode], depth: int) -> None:
        if node is None:
            return
        if depth > _MAX_WALK_DEPTH:
            log.warning("Maximum recursion depth reached at depth %d", depth)
            return
        if len(node.children) > _MAX_CHILDREN:
            log.warning("Node has too many children: %d", len(node.children))
            return

        kind = node.type
        if kind is NodeType.FUNCTION:
            self._declare_function(node, depth)
        elif kind in (NodeType.VARIABLE_DECLARATION, NodeType.ASSIGNMENT):
            var_type = node.data_type
            if not var_type and node.children:
                var_type = self._infer_type(node.children[0])
            self.add_symbol(Symbol(node.value, SymbolKind.VARIABLE, var_type, node.line))
            if node.children:
                self._walk(node.children[0], depth + 1)
        elif kind is NodeType.ENUM_DECLARATION:
            self.add_symbol(Symbol(node.value, SymbolKind.ENUM, "enum", node.line))
            for child in node.children:
                if child is not None and child.type is NodeType.IDENTIFIER:
                    self.add_symbol(
                        Symbol(child.value, SymbolKind.ENUM_VALUE, node.value, child.line)
                    )
        elif kind is NodeType.STRUCT_DECLARATION:
            self._declare_struct(node)
        elif kind is NodeType.CONSTANT_DECLARATION:
            const_type = node.data_type
            if not const_type and node.children:
                const_type = self._infer_type(node.children[0])
            self.add_symbol(Symbol(node.value, SymbolKind.CONSTANT, const_type, node.line))
        elif kind in _BLOCK_TYPES:
            self.enter_scope()
            self.current_scope.start_line = node.line
            if kind is NodeType.FOR_IN_ARRAY_LOOP and node.children:
                loop_var = node.children[0]
                if loop_var is not None and loop_var.type is NodeType.IDENTIFIER:
                    self.add_symbol(
                        Symbol(loop_var.value, SymbolKind.VARIABLE, "any", loop_var.line)
                    )
            for child in node.children:
                self._walk(child, depth + 1)
            self.exit_scope()
        else:
            for child in node.children:
                self._walk(child, depth + 1)

    def _declare_function(self, node: ASTNode, depth: int) -> None:
        self.add_symbol(Symbol(node.value, SymbolKind.FUNCTION, node.data_type, node.line))
        self.enter_scope()
        self.current_scope.start_line = node.line

        params = node.children[0] if node.children else None
        if params is not None:
            names = params.children[0::2]
            types = params.children[1::2]
            for name_node, type_node in itertools.zip_longest(names, types):
                param_type = type_node.value if type_node is not None else ""
                self.add_symbol(
                    Symbol(name_node.value, SymbolKind.PARAMETER, param_type, name_node.line)
                )

        if len(node.children) > 1:
            self._walk(node.children[1], depth + 1)
        self.exit_scope()

    def _declare_struct(self, node: ASTNode) -> None:
        struct_name = node.value
        symbol = Symbol(struct_name, SymbolKind.STRUCT, "struct", node.line, fields={})
        for child in node.children:
            if child is None:
                continue
            if child.type is NodeType.IDENTIFIER:
                symbol.fields[child.value] = StructField(child.value, child.data_type)
            elif child.type is NodeType.TYPE:
                full_name = f"{struct_name}.{child.value}"
                nested = StructField(
                    child.value,
                    full_name,
                    {
                        c.value: StructField(c.value, c.data_type)
                        for c in child.children
                        if c is not None and c.type is NodeType.IDENTIFIER
                    },
                )
                symbol.fields[child.value] = nested
                self.add_symbol(
                    Symbol(full_name, SymbolKind.STRUCT, "struct", child.line, fields=nested.fields)
                )
        self.add_symbol(symbol)

    def _infer_type(self, node: Optional[ASTNode]) -> str:
        if node is None:
            return ""
        kind = node.type
        if kind is NodeType.NUMBER:
            return "float" if "." in node.value else "int"
        if kind is NodeType.STRING:
            return "string"
        if kind is NodeType.BOOLEAN:
            return "bool"
        if kind is NodeType.ARRAY_LITERAL:
            return "array"
        if kind is NodeType.DICT_LITERAL:
            return node.data_type or "dict"
        if kind in (NodeType.IDENTIFIER, NodeType.CALL):
            sym = self.lookup(node.value)
            if sym is not None:
                return sym.type
        return ""


def build_symbol_table(ast: Optional[ASTNode]) -> SymbolTable:
    """Walk the syntax tree and collect its symbols."""
    table = SymbolTable()
    if ast is not None:
        table._walk(ast, 0)
    return table
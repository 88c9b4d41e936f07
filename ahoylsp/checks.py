"""Diagnostics for constants, method calls and enum declarations."""

from __future__ import annotations

from typing import Optional

from .ast import ASTNode, NodeType
from .document import Document
from .protocol import Diagnostic
from .symbol_table import SymbolKind
from .typecheck import levenshtein_distance, line_diagnostic

_STRING_METHODS = (
    "length", "upper", "lower", "replace", "contains",
    "camel_case", "snake_case", "pascal_case", "kebab_case",
    "match", "split", "count", "lpad", "rpad", "pad", "strip", "get_file",
)

_ARRAY_METHODS = (
    "length", "push", "pop", "sort", "reverse", "contains",
    "find", "filter", "map", "join", "slice",
)

_DICT_METHODS = (
    "size", "clear", "has", "has_all", "keys", "values",
    "sort", "stable_sort", "merge",
)


def valid_string_methods() -> list[str]:
    """Names of the methods a string supports."""
    return list(_STRING_METHODS)


def valid_array_methods() -> list[str]:
    """Names of the methods an array supports."""
    return list(_ARRAY_METHODS)


def valid_dict_methods() -> list[str]:
    """Names of the methods a dictionary supports."""
    return list(_DICT_METHODS)


def _global_constant(doc: Document, name: str):
    sym = doc.symbol_table.global_scope.lookup(name)
    if sym is not None and sym.kind is SymbolKind.CONSTANT:
        return sym
    return None


def check_const_reassignment(doc: Document) -> list[Diagnostic]:
    """Assignments to constants and names that collide with earlier constants."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        name = node.value
        if not name:
            continue
        if node.type is NodeType.ASSIGNMENT:
            if _global_constant(doc, name) is not None:
                diagnostics.append(
                    line_diagnostic(
                        doc,
                        node.line,
                        f"Cannot reassign constant '{name}'",
                        "const-reassignment",
                        len(name) + 10,
                    )
                )
        elif node.type is NodeType.VARIABLE_DECLARATION:
            sym = _global_constant(doc, name)
            if sym is not None and sym.line < node.line:
                diagnostics.append(
                    line_diagnostic(
                        doc,
                        node.line,
                        f"Cannot declare variable '{name}' - already declared as constant",
                        "variable-const-collision",
                        len(name) + 10,
                    )
                )
        elif node.type is NodeType.CONSTANT_DECLARATION:
            sym = _global_constant(doc, name)
            if sym is not None and sym.line < node.line:
                diagnostics.append(
                    line_diagnostic(
                        doc,
                        node.line,
                        f"Cannot redeclare constant '{name}'",
                        "const-redeclaration",
                        len(name) + 10,
                    )
                )
    return diagnostics


def check_const_method_calls(doc: Document) -> list[Diagnostic]:
    """Method calls and member accesses whose target is a constant."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type not in (NodeType.METHOD_CALL, NodeType.MEMBER_ACCESS):
            continue
        if not node.children:
            continue
        target = node.children[0]
        if target is None or target.type is not NodeType.IDENTIFIER:
            continue
        name = target.value
        if _global_constant(doc, name) is not None:
            diagnostics.append(
                line_diagnostic(
                    doc,
                    node.line,
                    f"Cannot call methods on constant '{name}'",
                    "const-method-call",
                    len(name) + 20,
                )
            )
    return diagnostics


def _target_type(doc: Document, target: Optional[ASTNode]) -> str:
    if target is None:
        return ""
    if target.type is NodeType.IDENTIFIER:
        sym = doc.symbol_table.global_scope.lookup(target.value)
        return sym.type if sym is not None else ""
    if target.type is NodeType.STRING:
        return "string"
    if target.type is NodeType.ARRAY_LITERAL:
        return "array"
    if target.type is NodeType.DICT_LITERAL:
        return "dict"
    return ""


_METHODS_BY_TYPE = {
    "string": _STRING_METHODS,
    "array": _ARRAY_METHODS,
    "dict": _DICT_METHODS,
}


def _closest(name: str, candidates) -> tuple[str, int]:
    best, best_distance = "", 1_000_000
    for candidate in candidates:
        distance = levenshtein_distance(name, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best, best_distance


def check_invalid_method_calls(doc: Document) -> list[Diagnostic]:
    """Calls to methods that strings, arrays or dictionaries do not have."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is not NodeType.METHOD_CALL or not node.children:
            continue
        methods = _METHODS_BY_TYPE.get(_target_type(doc, node.children[0]))
        if methods is None:
            continue
        method = node.value
        if method in methods:
            continue

        best, distance = _closest(method, methods)
        message = f"Method '{method}' does not exist"
        threshold = (len(method) * 2) // 5 if len(method) > 7 else 3
        if distance <= threshold and best:
            message += f", did you mean '{best}'?"
        diagnostics.append(
            line_diagnostic(doc, node.line, message, "invalid-method", len(method) + 20)
        )
    return diagnostics


def check_enum_duplicates(doc: Document) -> list[Diagnostic]:
    """Enum members declared more than once within the same enum."""
    if doc.ast is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is not NodeType.ENUM_DECLARATION:
            continue
        members: dict[str, list[int]] = {}
        for child in node.children:
            if child is not None and child.type is NodeType.IDENTIFIER:
                members.setdefault(child.value, []).append(child.line)
        for name, lines in members.items():
            for line in lines[1:]:
                diagnostics.append(
                    line_diagnostic(
                        doc,
                        line,
                        f"Duplicate enum member '{name}'",
                        "enum-duplicate-member",
                        len(name) + 10,
                    )
                )
    return diagnostics


def check_enum_name_duplicates(doc: Document) -> list[Diagnostic]:
    """Enums declared more than once under the same name."""
    if doc.ast is None:
        return []
    enums: dict[str, list[int]] = {}
    for node in doc.ast.walk():
        if node.type is NodeType.ENUM_DECLARATION and node.value:
            enums.setdefault(node.value, []).append(node.line)
    return [
        line_diagnostic(
            doc,
            line,
            f"Enum '{name}' declared twice",
            "enum-duplicate-declaration",
            len(name) + 10,
        )
        for name, lines in enums.items()
        for line in lines[1:]
    ]
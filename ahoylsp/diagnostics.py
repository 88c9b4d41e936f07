"""Document diagnostics: program layout, undefined names and parse errors."""

from __future__ import annotations

from typing import Iterable, Optional

from .ast import ASTNode, NodeType
from .checks import (
    check_const_method_calls,
    check_const_reassignment,
    check_enum_duplicates,
    check_enum_name_duplicates,
    check_invalid_method_calls,
)
from .document import Document
from .protocol import Diagnostic, DiagnosticSeverity, Position, Range
from .symbol_table import SymbolKind
from .typecheck import (
    SOURCE,
    check_function_call_argument_counts,
    check_function_call_argument_types,
    check_return_type_violations,
    check_type_mismatches,
    levenshtein_distance,
    line_diagnostic,
)

BUILTIN_FUNCTIONS = ("print", "sprintf", "ahoy")

_DECLARATION_TYPES = frozenset(
    {NodeType.ASSIGNMENT, NodeType.VARIABLE_DECLARATION, NodeType.CONSTANT_DECLARATION}
)


def _find_program_declaration(ast: Optional[ASTNode]) -> Optional[ASTNode]:
    if ast is None:
        return None
    return next(
        (node for node in ast.walk() if node.type is NodeType.PROGRAM_DECLARATION), None
    )


def check_program_declaration_position(doc: Document) -> Optional[Diagnostic]:
    """Report a program declaration that is not the first line of code."""
    program = _find_program_declaration(doc.ast)
    if program is None:
        return None

    first_code_line = next(
        (
            index
            for index, text in enumerate(doc.lines)
            if text.strip() and not text.strip().startswith("?")
        ),
        0,
    )
    if program.line <= first_code_line + 1:
        return None
    return line_diagnostic(
        doc,
        program.line,
        "Program declaration must be on the first line of the file",
        "program-position",
        20,
    )


def is_builtin_function(name: str) -> bool:
    """Whether ``name`` is one of the language's built-in functions."""
    return name in BUILTIN_FUNCTIONS


def find_similar_function(name: str, available_funcs: Iterable[str]) -> tuple[str, int]:
    """The closest function name by edit distance, with that distance."""
    best, best_distance = "", 1_000_000
    for candidate in available_funcs:
        distance = levenshtein_distance(name, candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best, best_distance


def check_undefined_functions(doc: Document) -> list[Diagnostic]:
    """Calls to functions that are neither built in nor declared."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    scope = doc.symbol_table.global_scope
    available = list(BUILTIN_FUNCTIONS) + [
        sym.name for sym in scope.symbols.values() if sym.kind is SymbolKind.FUNCTION
    ]

    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is not NodeType.CALL:
            continue
        name = node.value
        if is_builtin_function(name):
            continue
        sym = scope.lookup(name)
        if sym is not None and sym.kind is SymbolKind.FUNCTION:
            continue

        similar, distance = find_similar_function(name, available)
        message = f"{name} func not found"
        threshold = len(name) // 3 if len(name) > 10 else 3
        if distance <= threshold and similar:
            message += f", did you mean {similar}"
        diagnostics.append(
            line_diagnostic(doc, node.line, message, "undefined-function", len(name) + 10)
        )
    return diagnostics


def _looks_like_constant(name: str) -> bool:
    return len(name) > 1 and not any("a" <= ch <= "z" for ch in name)


def _children_to_check(node: ASTNode) -> list[Optional[ASTNode]]:
    if node.type in _DECLARATION_TYPES:
        return node.children[1:]
    if node.type is NodeType.FUNCTION:
        return node.children[1:2]
    if node.type in (NodeType.ENUM_DECLARATION, NodeType.STRUCT_DECLARATION):
        return []
    return node.children


def check_undeclared_identifiers(doc: Document) -> list[Diagnostic]:
    """Identifiers used without being declared anywhere in the global scope."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    scope = doc.symbol_table.global_scope
    diagnostics: list[Diagnostic] = []

    stack: list[Optional[ASTNode]] = [doc.ast]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        if node.type is NodeType.IDENTIFIER and scope.lookup(node.value) is None:
            name = node.value
            kind = "constant" if _looks_like_constant(name) else "variable"
            diagnostics.append(
                line_diagnostic(
                    doc,
                    node.line,
                    f"Use of undeclared {kind} '{name}'",
                    "undeclared-identifier",
                    len(name) + 10,
                )
            )
        stack.extend(reversed(_children_to_check(node)))
    return diagnostics


def parse_error_diagnostics(doc: Document) -> list[Diagnostic]:
    """Parser errors converted to zero-based diagnostics."""
    diagnostics: list[Diagnostic] = []
    for err in doc.errors:
        start_col = max(err.column - 1, 0)
        end_col = err.column + 10
        if end_col < start_col:
            end_col = start_col + 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    Position(err.line - 1, start_col), Position(err.line - 1, end_col)
                ),
                message=err.message,
                severity=DiagnosticSeverity.ERROR,
                source=SOURCE,
            )
        )
    return diagnostics


def collect_diagnostics(doc: Document) -> list[Diagnostic]:
    """Every diagnostic for a document, in the order they are published."""
    diagnostics: list[Diagnostic] = []
    if doc.ast is not None:
        program = check_program_declaration_position(doc)
        if program is not None:
            diagnostics.append(program)
        if doc.symbol_table is not None:
            for check in (
                check_const_reassignment,
                check_const_method_calls,
                check_invalid_method_calls,
                check_return_type_violations,
                check_enum_duplicates,
                check_enum_name_duplicates,
                check_undefined_functions,
                check_undeclared_identifiers,
                check_function_call_argument_counts,
                check_function_call_argument_types,
                check_type_mismatches,
            ):
                diagnostics.extend(check(doc))
    diagnostics.extend(parse_error_diagnostics(doc))
    return diagnostics
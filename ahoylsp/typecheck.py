"""Type-related diagnostics: return types, call arguments and annotated values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .ast import ASTNode, NodeType
from .document import Document
from .protocol import Diagnostic, DiagnosticSeverity, Position, Range

SOURCE = "ahoy"

_ARITHMETIC_OPS = frozenset({"+", "-", "*", "/", "%"})
_COMPARISON_OPS = frozenset({"<", ">", "<=", ">=", "is", "not"})


@dataclass(frozen=True)
class ParameterInfo:
    """A declared function parameter."""

    name: str
    type: str = ""
    has_default: bool = False


@dataclass
class FunctionSignature:
    """Name, parameters and return type of a declared function."""

    name: str
    return_type: str = ""
    parameters: list[ParameterInfo] = field(default_factory=list)

    @property
    def required_params(self) -> int:
        return sum(1 for p in self.parameters if not p.has_default)

    @property
    def total_params(self) -> int:
        return len(self.parameters)


def line_diagnostic(
    doc: Document, line: int, message: str, code: str, fallback_width: int
) -> Diagnostic:
    """An error spanning the whole of a 1-based line.

    When the line is empty or missing the span is ``fallback_width`` wide.
    """
    width = len(doc.line_text(line)) or fallback_width
    return Diagnostic(
        range=Range(Position(line - 1, 0), Position(line - 1, width)),
        message=message,
        severity=DiagnosticSeverity.ERROR,
        source=SOURCE,
        code=code,
    )


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance between two strings."""
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def infer_return_type(node: Optional[ASTNode]) -> str:
    """Type of a returned expression, as far as it can be told from literals."""
    if node is None:
        return "void"
    if node.type is NodeType.NUMBER:
        return "float" if "." in node.value else "int"
    if node.type is NodeType.STRING:
        return "string"
    if node.type is NodeType.BOOLEAN:
        return "bool"
    return "unknown"


def infer_expression_type(node: Optional[ASTNode]) -> str:
    """Type of an expression, or ``"unknown"`` when it cannot be inferred."""
    if node is None:
        return "unknown"
    kind = node.type
    if kind is NodeType.NUMBER:
        return "float" if "." in node.value else "int"
    if kind in (NodeType.STRING, NodeType.F_STRING):
        return "string"
    if kind is NodeType.CHAR:
        return "char"
    if kind is NodeType.BOOLEAN:
        return "bool"
    if kind is NodeType.ARRAY_LITERAL:
        return "array"
    if kind is NodeType.DICT_LITERAL:
        return "dict"
    if kind is NodeType.BINARY_OP and len(node.children) >= 2:
        left = infer_expression_type(node.children[0])
        right = infer_expression_type(node.children[1])
        if node.value in _ARITHMETIC_OPS:
            if "float" in (left, right):
                return "float"
            if "int" in (left, right):
                return "int"
        if node.value in _COMPARISON_OPS:
            return "bool"
    return "unknown"


def collect_function_signatures(ast: Optional[ASTNode]) -> dict[str, FunctionSignature]:
    """Signatures of every function declared in the tree, keyed by name."""
    signatures: dict[str, FunctionSignature] = {}
    if ast is None:
        return signatures
    for node in ast.walk():
        if node.type is not NodeType.FUNCTION:
            continue
        sig = FunctionSignature(name=node.value, return_type=node.data_type)
        params = node.children[0] if node.children else None
        if params is not None and params.type is NodeType.BLOCK:
            sig.parameters = [
                ParameterInfo(p.value, p.data_type, p.default_value is not None)
                for p in params.children
                if p is not None and p.type is NodeType.IDENTIFIER
            ]
        signatures[node.value] = sig
    return signatures


def _check_function_returns(doc: Document, func: ASTNode) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    return_type = func.data_type
    has_return = False

    body = func.children[1] if len(func.children) >= 2 else None
    if body is not None:
        for n in body.walk():
            if n.type is not NodeType.RETURN_STATEMENT:
                continue
            has_return = True
            if return_type == "infer" or not n.children:
                continue
            returned = infer_return_type(n.children[0])
            if return_type == "void":
                diagnostics.append(
                    line_diagnostic(
                        doc,
                        n.line,
                        f"Expected void, got return type {returned}",
                        "void-return-violation",
                        30,
                    )
                )
            elif return_type:
                expected = [t.strip() for t in return_type.split(",")]
                matches = returned in expected or "generic" in expected
                if not matches and returned != "unknown":
                    diagnostics.append(
                        line_diagnostic(
                            doc,
                            n.line,
                            f"Expected return type {return_type}, got {returned}",
                            "return-type-mismatch",
                            30,
                        )
                    )

    if return_type not in ("", "void", "infer") and not has_return:
        diagnostics.append(
            line_diagnostic(
                doc,
                func.line,
                f"Function with return type {return_type} must return a value",
                "missing-return",
                30,
            )
        )
    return diagnostics


def check_return_type_violations(doc: Document) -> list[Diagnostic]:
    """Returns that do not fit the declared type, and missing returns."""
    if doc.ast is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is NodeType.FUNCTION:
            diagnostics.extend(_check_function_returns(doc, node))
    return diagnostics


def _argument_count_message(count: int, lo: int, hi: int) -> str:
    if count < lo:
        if lo != hi:
            return f"expected {lo}-{hi} arguments, got {count}"
        if lo == 0:
            return f"expected no arguments, got {count}"
        if lo == 1:
            return "expected 1 argument, got none"
        return f"expected {lo} arguments, got {count}"
    if count > hi:
        if lo != hi:
            return f"expected {lo}-{hi} arguments, got {count}"
        if hi == 1:
            return f"expected 1 argument, got {count}"
        return f"expected {hi} arguments, got {count}"
    return ""


def check_function_call_argument_counts(doc: Document) -> list[Diagnostic]:
    """Calls to declared functions with too few or too many arguments."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    signatures = collect_function_signatures(doc.ast)
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is not NodeType.CALL:
            continue
        sig = signatures.get(node.value)
        if sig is None:
            continue
        message = _argument_count_message(
            len(node.children), sig.required_params, sig.total_params
        )
        if message:
            diagnostics.append(
                line_diagnostic(
                    doc, node.line, message, "argument-count-mismatch", len(node.value) + 10
                )
            )
    return diagnostics


def check_function_call_argument_types(doc: Document) -> list[Diagnostic]:
    """Calls whose literal arguments do not match the parameter types."""
    if doc.ast is None or doc.symbol_table is None:
        return []
    signatures = collect_function_signatures(doc.ast)
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type is not NodeType.CALL:
            continue
        sig = signatures.get(node.value)
        if sig is None or not node.children:
            continue
        if not any(p.type for p in sig.parameters):
            continue

        expected_types = [p.type for p, _ in zip(sig.parameters, node.children)]
        actual_types = [infer_expression_type(arg) for arg in node.children]
        mismatch = any(
            expected != actual
            for expected, actual in zip(expected_types, actual_types)
            if expected not in ("", "unknown") and actual != "unknown"
        )
        if not mismatch:
            continue

        expected_str = ", ".join(t or "unknown" for t in expected_types)
        actual_str = ", ".join(actual_types)
        message = f"expected function arguments [{expected_str}] got [{actual_str}]"
        diagnostics.append(
            line_diagnostic(
                doc, node.line, message, "argument-type-mismatch", len(node.value) + 10
            )
        )
    return diagnostics


def check_type_mismatches(doc: Document) -> list[Diagnostic]:
    """Annotated variables and constants given a value of another type."""
    if doc.ast is None:
        return []
    diagnostics: list[Diagnostic] = []
    for node in doc.ast.walk():
        if node.type not in (NodeType.ASSIGNMENT, NodeType.CONSTANT_DECLARATION):
            continue
        expected = node.data_type
        if not expected or not node.children:
            continue
        actual = infer_expression_type(node.children[0])
        if actual != "unknown" and actual != expected and expected != "generic":
            diagnostics.append(
                line_diagnostic(
                    doc, node.line, f"expected {expected} got {actual}", "type-mismatch", 30
                )
            )
    return diagnostics
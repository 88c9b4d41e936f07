"""Syntax tree nodes and parse errors produced by the Ahoy parser."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional


class NodeType(enum.Enum):
    """Kinds of nodes that appear in an Ahoy syntax tree."""

    PROGRAM = enum.auto()
    PROGRAM_DECLARATION = enum.auto()
    FUNCTION = enum.auto()
    VARIABLE_DECLARATION = enum.auto()
    ASSIGNMENT = enum.auto()
    CONSTANT_DECLARATION = enum.auto()
    ENUM_DECLARATION = enum.auto()
    STRUCT_DECLARATION = enum.auto()
    TYPE = enum.auto()
    IF_STATEMENT = enum.auto()
    WHILE_LOOP = enum.auto()
    FOR_LOOP = enum.auto()
    FOR_RANGE_LOOP = enum.auto()
    FOR_COUNT_LOOP = enum.auto()
    FOR_IN_ARRAY_LOOP = enum.auto()
    FOR_IN_DICT_LOOP = enum.auto()
    BLOCK = enum.auto()
    RETURN_STATEMENT = enum.auto()
    IDENTIFIER = enum.auto()
    NUMBER = enum.auto()
    STRING = enum.auto()
    F_STRING = enum.auto()
    CHAR = enum.auto()
    BOOLEAN = enum.auto()
    ARRAY_LITERAL = enum.auto()
    DICT_LITERAL = enum.auto()
    CALL = enum.auto()
    METHOD_CALL = enum.auto()
    MEMBER_ACCESS = enum.auto()
    BINARY_OP = enum.auto()
    ARRAY_ACCESS = enum.auto()


@dataclass
class ASTNode:
    """A node of the syntax tree; ``line`` is 1-based."""

    type: NodeType
    value: str = ""
    data_type: str = ""
    line: int = 0
    children: list[Optional[ASTNode]] = field(default_factory=list)
    default_value: Optional[ASTNode] = None

    def walk(self) -> Iterator[ASTNode]:
        """Yield this node and all its descendants in pre-order."""
        stack: list[ASTNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed([c for c in node.children if c is not None]))


@dataclass(frozen=True)
class ParseError:
    """An error reported by the parser; line and column are 1-based."""

    line: int
    column: int
    message: str
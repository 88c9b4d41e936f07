import pytest

from ahoylsp.ast import ASTNode, NodeType, ParseError
from ahoylsp.document import (
    MAX_DOCUMENT_SIZE,
    Document,
    DocumentTooLargeError,
    open_document,
)

URI = "file:///tmp/main.ahoy"


def test_line_text_is_one_based():
    doc = Document(URI, lines=["first", "second"])
    assert doc.line_text(1) == "first"
    assert doc.line_text(2) == "second"


@pytest.mark.parametrize("line_number", [0, -1, 3])
def test_line_text_out_of_range_is_empty(line_number):
    doc = Document(URI, lines=["first", "second"])
    assert doc.line_text(line_number) == ""


def test_open_document_splits_lines_and_builds_symbols():
    text = "x: 1\nprint x\n"
    ast = ASTNode(
        NodeType.PROGRAM,
        children=[ASTNode(NodeType.ASSIGNMENT, "x", line=1, children=[ASTNode(NodeType.NUMBER, "1")])],
    )
    errors = [ParseError(2, 1, "oops")]
    doc = open_document(URI, text, ast, errors, 3)
    assert doc.lines == text.split("\n")
    assert doc.content == text
    assert doc.version == 3
    assert doc.errors == errors
    assert doc.symbol_table.lookup("x").type == "int"


def test_open_document_without_ast_has_empty_table():
    doc = open_document(URI, "garbage")
    assert doc.ast is None
    assert doc.symbol_table.get_all_symbols() == []


def test_open_document_rejects_huge_text():
    with pytest.raises(DocumentTooLargeError):
        open_document(URI, "a" * (MAX_DOCUMENT_SIZE + 1))
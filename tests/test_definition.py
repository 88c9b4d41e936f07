import pytest

from ahoylsp.ast import ASTNode, NodeType
from ahoylsp.definition import find_definition, get_word_at_position, is_word_char
from ahoylsp.document import Document, open_document
from ahoylsp.protocol import Location, Position, Range

URI = "file:///tmp/sample.ahoy"
TEXT = "count: 5\n\nfunc greet do\nend\nahoy count"


def _doc():
    ast = ASTNode(
        NodeType.PROGRAM,
        children=[
            ASTNode(
                NodeType.ASSIGNMENT,
                value="count",
                line=1,
                children=[ASTNode(NodeType.NUMBER, value="5", line=1)],
            ),
            ASTNode(
                NodeType.FUNCTION,
                value="greet",
                line=3,
                children=[ASTNode(NodeType.BLOCK, line=3), ASTNode(NodeType.BLOCK, line=3)],
            ),
        ],
    )
    return open_document(URI, TEXT, ast)


@pytest.mark.parametrize("ch", ["a", "z", "A", "Z", "0", "9", "_"])
def test_word_chars(ch):
    assert is_word_char(ch) is True


@pytest.mark.parametrize("ch", [":", " ", ".", "-", "(", "\t"])
def test_non_word_chars(ch):
    assert is_word_char(ch) is False


def test_word_in_middle():
    assert get_word_at_position(_doc(), 0, 2) == "count"


def test_word_just_after_cursor_end():
    # The character under the cursor is ':' but the word before it touches it.
    assert get_word_at_position(_doc(), 0, 5) == "count"


def test_no_word_between_separators():
    assert get_word_at_position(_doc(), 0, 6) == ""


@pytest.mark.parametrize("line,character", [(-1, 0), (99, 0), (0, -1), (0, 8), (1, 0)])
def test_out_of_range_positions(line, character):
    assert get_word_at_position(_doc(), line, character) == ""


def test_none_document():
    assert get_word_at_position(None, 0, 0) == ""


def test_overlong_line_is_ignored():
    long_line = "a" * 10001
    doc = Document(uri=URI, content=long_line, lines=[long_line])
    assert get_word_at_position(doc, 0, 3) == ""


def test_definition_of_variable():
    loc = find_definition(_doc(), 4, 7)
    assert loc == Location(URI, Range(Position(0, 0), Position(0, len("count"))))


def test_definition_of_function():
    loc = find_definition(_doc(), 2, 6)
    assert loc.uri == URI
    assert loc.range.start == Position(2, 0)
    assert loc.range.end.character == len("greet")


def test_definition_unknown_word():
    assert find_definition(_doc(), 4, 1) is None


def test_definition_no_word():
    assert find_definition(_doc(), 1, 0) is None


def test_definition_none_document():
    assert find_definition(None, 0, 0) is None
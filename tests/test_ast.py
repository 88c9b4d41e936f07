import dataclasses

import pytest

from ahoylsp.ast import ASTNode, NodeType, ParseError


def _ident(name, *children):
    return ASTNode(NodeType.IDENTIFIER, value=name, children=list(children))


def test_walk_is_pre_order():
    tree = _ident("root", _ident("a", _ident("c")), _ident("b"))
    assert [n.value for n in tree.walk()] == ["root", "a", "c", "b"]


def test_walk_skips_missing_children():
    tree = _ident("root", None, _ident("x"), None)
    assert [n.value for n in tree.walk()] == ["root", "x"]


def test_walk_of_leaf_yields_itself():
    leaf = ASTNode(NodeType.NUMBER, value="3")
    assert list(leaf.walk()) == [leaf]


def test_node_defaults():
    node = ASTNode(NodeType.BLOCK)
    assert node.children == []
    assert node.default_value is None
    assert node.value == ""
    assert node.data_type == ""


def test_parse_error_is_immutable():
    err = ParseError(line=2, column=5, message="expected 'do'")
    assert (err.line, err.column, err.message) == (2, 5, "expected 'do'")
    with pytest.raises(dataclasses.FrozenInstanceError):
        err.line = 9
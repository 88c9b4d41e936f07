from ahoylsp.ast import ASTNode, NodeType
from ahoylsp.checks import valid_array_methods, valid_dict_methods, valid_string_methods
from ahoylsp.completion import (
    array_method_items,
    complete,
    dict_method_items,
    is_identifier_char,
    string_method_items,
)
from ahoylsp.document import open_document
from ahoylsp.protocol import CompletionItemKind

URI = "file:///tmp/sample.ahoy"


def program(*children):
    return ASTNode(NodeType.PROGRAM, children=list(children))


def labels(result):
    return [item.label for item in result.items]


def test_is_identifier_char():
    assert is_identifier_char("a")
    assert is_identifier_char("Z")
    assert is_identifier_char("7")
    assert not is_identifier_char("_")
    assert not is_identifier_char(".")


def test_method_item_lists_match_valid_methods():
    assert [i.label for i in string_method_items("")] == valid_string_methods()
    assert [i.label for i in array_method_items("")] == valid_array_methods()
    assert [i.label for i in dict_method_items("")] == valid_dict_methods()


def test_method_items_filter_by_prefix():
    items = array_method_items("pu")
    assert [i.label for i in items] == ["push"]
    assert items[0].insert_text == "push|element|"
    assert items[0].kind is CompletionItemKind.METHOD
    assert items[0].documentation == "Adds an element to the end of the array"


def test_none_document_gives_empty_list():
    assert complete(None, 0, 0).items == []


def test_out_of_range_positions_give_empty_list():
    doc = open_document(URI, "lo")
    assert complete(doc, 5, 0).items == []
    assert complete(doc, 0, 10).items == []
    assert complete(doc, -1, 0).items == []


def test_keyword_prefix():
    doc = open_document(URI, "lo")
    result = complete(doc, 0, 2)
    assert "loop" in labels(result)
    assert all(label.startswith("lo") for label in labels(result))
    loop = next(i for i in result.items if i.label == "loop")
    assert loop.kind is CompletionItemKind.KEYWORD
    assert loop.detail == "keyword"
    assert result.is_incomplete is False


def test_empty_prefix_includes_keywords_and_operators():
    doc = open_document(URI, "")
    result = complete(doc, 0, 0)
    names = labels(result)
    assert "if" in names and "vector2" in names
    plus = next(i for i in result.items if i.label == "plus")
    assert plus.kind is CompletionItemKind.OPERATOR
    assert plus.detail == "addition operator (+)"


def test_string_literal_dot():
    text = 'x: "abc".'
    doc = open_document(URI, text)
    assert labels(complete(doc, 0, len(text))) == valid_string_methods()


def test_array_literal_dot_with_prefix():
    text = "[1, [2]].pu"
    doc = open_document(URI, text)
    result = complete(doc, 0, len(text))
    assert labels(result) == ["push"]


def test_dict_literal_dot():
    text = "{a: 1}."
    doc = open_document(URI, text)
    assert labels(complete(doc, 0, len(text))) == valid_dict_methods()


def test_string_variable_methods():
    ast = program(
        ASTNode(
            NodeType.ASSIGNMENT,
            value="s",
            line=1,
            children=[ASTNode(NodeType.STRING, value="hi", line=1)],
        )
    )
    doc = open_document(URI, 's: "hi"\ns.up', ast)
    assert labels(complete(doc, 1, 4)) == ["upper"]


def test_constant_receiver_gives_nothing():
    ast = program(
        ASTNode(
            NodeType.CONSTANT_DECLARATION,
            value="NAME",
            line=1,
            children=[ASTNode(NodeType.STRING, value="x", line=1)],
        )
    )
    doc = open_document(URI, 'NAME :: "x"\nNAME.', ast)
    assert complete(doc, 1, 5).items == []


def test_struct_fields():
    struct = ASTNode(
        NodeType.STRUCT_DECLARATION,
        value="point",
        line=1,
        children=[
            ASTNode(NodeType.IDENTIFIER, value="x", data_type="int", line=2),
            ASTNode(NodeType.IDENTIFIER, value="y", data_type="int", line=3),
        ],
    )
    var = ASTNode(NodeType.ASSIGNMENT, value="p", data_type="point", line=5)
    doc = open_document(URI, "point struct:\nx int\ny int\nend\np: point\np.", program(struct, var))
    result = complete(doc, 5, 2)
    assert sorted(labels(result)) == ["x", "y"]
    assert all(i.kind is CompletionItemKind.FIELD and i.detail == "int" for i in result.items)


def test_unknown_receiver_gives_nothing():
    doc = open_document(URI, "thing.", program())
    assert complete(doc, 0, 6).items == []


def test_user_functions():
    greet = ASTNode(
        NodeType.FUNCTION,
        value="greet",
        data_type="int",
        line=1,
        children=[ASTNode(NodeType.BLOCK), ASTNode(NodeType.BLOCK)],
    )
    greetvoid = ASTNode(
        NodeType.FUNCTION,
        value="greetall",
        data_type="void",
        line=2,
        children=[ASTNode(NodeType.BLOCK), ASTNode(NodeType.BLOCK)],
    )
    doc = open_document(URI, "a\nb\ngr", program(greet, greetvoid))
    result = complete(doc, 2, 2)
    by_label = {i.label: i for i in result.items}
    assert by_label["greet"].kind is CompletionItemKind.FUNCTION
    assert by_label["greet"].detail == "func -> int"
    assert by_label["greetall"].detail == "func"


def test_variables_constants_and_enum_values():
    ast = program(
        ASTNode(
            NodeType.ASSIGNMENT,
            value="my_var",
            line=1,
            children=[ASTNode(NodeType.NUMBER, value="1", line=1)],
        ),
        ASTNode(
            NodeType.ENUM_DECLARATION,
            value="palette",
            line=2,
            children=[ASTNode(NodeType.IDENTIFIER, value="RED", line=3)],
        ),
    )
    doc = open_document(URI, "my_var: 1\npalette enum:\nRED\nmy_v\nRE", ast)
    variables = complete(doc, 3, 4)
    assert labels(variables) == ["my_var"]
    assert variables.items[0].kind is CompletionItemKind.VARIABLE
    assert variables.items[0].detail == "int"
    enum_items = complete(doc, 4, 2)
    red = next(i for i in enum_items.items if i.label == "RED")
    assert red.kind is CompletionItemKind.ENUM_MEMBER
    assert red.detail == "palette"
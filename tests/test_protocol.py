import json

from ahoylsp.protocol import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    Diagnostic,
    DiagnosticSeverity,
    DocumentSymbol,
    Hover,
    Location,
    LspSymbolKind,
    MarkupContent,
    Position,
    Range,
    to_json,
)


def _range(line=1, start=0, end=4):
    return Range(Position(line, start), Position(line, end))


def test_position_json():
    assert to_json(Position(3, 7)) == {"line": 3, "character": 7}


def test_diagnostic_omits_unset_fields():
    diag = Diagnostic(range=_range(), message="boom", severity=DiagnosticSeverity.ERROR, source="ahoy")
    data = to_json(diag)
    assert "code" not in data
    assert data["severity"] == DiagnosticSeverity.ERROR.value
    assert data["source"] == "ahoy"
    assert data["message"] == "boom"


def test_document_symbol_uses_camel_case():
    sym = DocumentSymbol("main", LspSymbolKind.FUNCTION, _range(), _range())
    data = to_json(sym)
    assert "selectionRange" in data
    assert data["kind"] == LspSymbolKind.FUNCTION.value
    assert "detail" not in data


def test_completion_list_keeps_false_flag_and_insert_text():
    items = [CompletionItem("upper", CompletionItemKind.METHOD, insert_text="upper||")]
    data = to_json(CompletionList(items=items))
    assert data["isIncomplete"] is False
    assert data["items"][0]["insertText"] == "upper||"


def test_hover_without_range():
    data = to_json(Hover(MarkupContent("**x**")))
    assert "range" not in data
    assert data["contents"]["value"] == "**x**"


def test_json_round_trip():
    loc = Location("file:///a.ahoy", _range(2, 1, 5))
    data = to_json(loc)
    assert json.loads(json.dumps(data)) == data
    assert data["range"]["end"]["character"] == 5
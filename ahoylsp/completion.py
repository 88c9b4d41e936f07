"""Code completion: keywords, operators, declared symbols and methods."""

from __future__ import annotations

from typing import NamedTuple, Optional

from .document import Document
from .protocol import CompletionItem, CompletionItemKind, CompletionList
from .symbol_table import SymbolKind, SymbolTable, build_symbol_table

_MAX_LINE_LENGTH = 10000

KEYWORDS = (
    "if", "else", "elseif", "anif", "then",
    "loop", "in", "to", "do",
    "func", "return",
    "switch", "on",
    "when",
    "import", "program",
    "ahoy",
    "is", "not", "and", "or",
    "break", "skip",
    "true", "false",
    "enum", "struct", "type",
    "int", "float", "string", "bool", "dict", "vector2", "color",
)

OPERATORS = (
    ("plus", "addition operator (+)"),
    ("minus", "subtraction operator (-)"),
    ("times", "multiplication operator (*)"),
    ("div", "division operator (/)"),
    ("mod", "modulo operator (%)"),
    ("lesser", "less than operator (<)"),
    ("greater", "greater than operator (>)"),
)


class _Method(NamedTuple):
    label: str
    detail: str
    description: str
    params: str


_STRING_METHODS = (
    _Method("length", "Get string length", "Returns the number of characters in the string", "||"),
    _Method("upper", "Convert to uppercase", "Returns the string in uppercase", "||"),
    _Method("lower", "Convert to lowercase", "Returns the string in lowercase", "||"),
    _Method("replace", "Replace substring", "Replaces occurrences of a substring with another", "|old, new|"),
    _Method("contains", "Check if contains substring", "Returns true if the string contains the substring", "|substring|"),
    _Method("camel_case", "Convert to camelCase", "Converts the string to camelCase", "||"),
    _Method("snake_case", "Convert to snake_case", "Converts the string to snake_case", "||"),
    _Method("pascal_case", "Convert to PascalCase", "Converts the string to PascalCase", "||"),
    _Method("kebab_case", "Convert to kebab-case", "Converts the string to kebab-case", "||"),
    _Method("match", "Match regex pattern", "Tests if the string matches a regular expression", "|pattern|"),
    _Method("split", "Split string", "Splits the string by a delimiter", "|delimiter|"),
    _Method("count", "Count occurrences", "Counts occurrences of a character or substring", "|substring|"),
    _Method("lpad", "Left pad string", "Pads the string on the left to a specified length", "|length, char|"),
    _Method("rpad", "Right pad string", "Pads the string on the right to a specified length", "|length, char|"),
    _Method("pad", "Pad string both sides", "Pads the string on both sides to a specified length", "|length, char|"),
    _Method("strip", "Trim whitespace", "Removes leading and trailing whitespace", "||"),
    _Method("get_file", "Get filename from path", "Extracts the filename from a file path", "||"),
)

_ARRAY_METHODS = (
    _Method("length", "Get array length", "Returns the number of elements in the array", "||"),
    _Method("push", "Add element", "Adds an element to the end of the array", "|element|"),
    _Method("pop", "Remove last element", "Removes and returns the last element", "||"),
    _Method("sort", "Sort array", "Sorts the array in place", "||"),
    _Method("reverse", "Reverse array", "Reverses the array in place", "||"),
    _Method("contains", "Check if contains", "Returns true if array contains element", "|element|"),
    _Method("find", "Find element", "Returns index of element or -1", "|element|"),
    _Method("filter", "Filter array", "Returns new array with elements matching condition", "|condition|"),
    _Method("map", "Map array", "Returns new array with transformed elements", "|transform|"),
    _Method("join", "Join to string", "Joins array elements into a string", "|separator|"),
    _Method("slice", "Get subarray", "Returns a portion of the array", "|start, end|"),
)

_DICT_METHODS = (
    _Method("size", "Get dictionary size", "Returns the number of key-value pairs in the dictionary", "||"),
    _Method("clear", "Clear all entries", "Removes all entries from the dictionary", "||"),
    _Method("has", "Check if key exists", "Returns true if the key exists in the dictionary", "|key|"),
    _Method("has_all", "Check if all keys exist", "Returns true if all keys in the array exist", "|keys_array|"),
    _Method("keys", "Get all keys", "Returns an array of all dictionary keys", "||"),
    _Method("values", "Get all values", "Returns an array of all dictionary values", "||"),
    _Method("sort", "Sort by keys", "Returns a new dictionary sorted by keys", "||"),
    _Method("stable_sort", "Stable sort by keys", "Returns a new dictionary with stable sort by keys", "||"),
    _Method("merge", "Merge dictionaries", "Merges another dictionary into this one", "|other_dict|"),
)


def is_identifier_char(ch: str) -> bool:
    """Whether ``ch`` is an ASCII letter or digit."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9")


def _is_name_char(ch: str) -> bool:
    return is_identifier_char(ch) or ch == "_"


def _matches(label: str, prefix: str) -> bool:
    return not prefix or label.startswith(prefix)


def _method_items(methods: tuple[_Method, ...], prefix: str) -> list[CompletionItem]:
    return [
        CompletionItem(
            label=m.label,
            kind=CompletionItemKind.METHOD,
            detail=m.detail,
            documentation=m.description,
            insert_text=m.label + m.params,
        )
        for m in methods
        if _matches(m.label, prefix)
    ]


def string_method_items(prefix: str) -> list[CompletionItem]:
    """Completion items for string methods starting with ``prefix``."""
    return _method_items(_STRING_METHODS, prefix)


def array_method_items(prefix: str) -> list[CompletionItem]:
    """Completion items for array methods starting with ``prefix``."""
    return _method_items(_ARRAY_METHODS, prefix)


def dict_method_items(prefix: str) -> list[CompletionItem]:
    """Completion items for dictionary methods starting with ``prefix``."""
    return _method_items(_DICT_METHODS, prefix)


_LITERAL_METHODS = {
    "string": string_method_items,
    "array": array_method_items,
    "dict": dict_method_items,
}


def _typed_prefix(text: str, character: int) -> str:
    start = character
    while start > 0 and _is_name_char(text[start - 1]):
        start -= 1
    return text[start:character]


def _matching_open(text: str, end: int, open_ch: str, close_ch: str) -> int:
    """Index of the bracket opening the one at ``end``, or -1."""
    depth = 1
    pos = end - 1
    while pos >= 0 and depth > 0:
        if text[pos] == close_ch:
            depth += 1
        elif text[pos] == open_ch:
            depth -= 1
        pos -= 1
    pos += 1
    if pos >= 0 and text[pos] == open_ch:
        return pos
    return -1


def _receiver(text: str, dot: int) -> Optional[tuple[str, str]]:
    """What stands before the dot at ``dot``: (text, literal type or "")."""
    end = dot - 1
    if end < 0:
        return None
    ch = text[end]
    if ch in ('"', "'"):
        start = text.rfind(ch, 0, end)
        if start >= 0:
            return text[start : end + 1], "string"
        return None
    if ch == "]":
        start = _matching_open(text, end, "[", "]")
        return (text[start : end + 1], "array") if start >= 0 else None
    if ch == "}":
        start = _matching_open(text, end, "{", "}")
        return (text[start : end + 1], "dict") if start >= 0 else None
    start = end
    while start >= 0 and _is_name_char(text[start]):
        start -= 1
    start += 1
    if start <= end:
        return text[start : end + 1], ""
    return None


def _member_items(table: SymbolTable, name: str, prefix: str) -> list[CompletionItem]:
    sym = table.lookup(name)
    if sym is None or sym.kind is SymbolKind.CONSTANT:
        return []
    literal = _LITERAL_METHODS.get(sym.type)
    if literal is not None:
        return literal(prefix)
    if sym.kind is SymbolKind.VARIABLE:
        fields = table.get_struct_fields(sym.type)
        if fields:
            return [
                CompletionItem(label=fname, kind=CompletionItemKind.FIELD, detail=f.type)
                for fname, f in fields.items()
                if _matches(fname, prefix)
            ]
    return []


def _symbol_items(table: SymbolTable, prefix: str) -> list[CompletionItem]:
    symbols = list(table.global_scope.symbols.values())
    items: list[CompletionItem] = []
    for sym in symbols:
        if sym.kind is SymbolKind.FUNCTION and _matches(sym.name, prefix):
            detail = "func"
            if sym.type and sym.type != "void":
                detail += " -> " + sym.type
            items.append(
                CompletionItem(label=sym.name, kind=CompletionItemKind.FUNCTION, detail=detail)
            )
    for kind, item_kind in (
        (SymbolKind.VARIABLE, CompletionItemKind.VARIABLE),
        (SymbolKind.CONSTANT, CompletionItemKind.CONSTANT),
        (SymbolKind.ENUM_VALUE, CompletionItemKind.ENUM_MEMBER),
    ):
        items.extend(
            CompletionItem(label=sym.name, kind=item_kind, detail=sym.type)
            for sym in symbols
            if sym.kind is kind and _matches(sym.name, prefix)
        )
    return items


def complete(doc: Optional[Document], line: int, character: int) -> CompletionList:
    """Completion candidates at a zero-based position."""
    if doc is None or doc.lines is None:
        return CompletionList()
    if not 0 <= line < len(doc.lines):
        return CompletionList()
    text = doc.lines[line]
    if len(text) > _MAX_LINE_LENGTH or not 0 <= character <= len(text):
        return CompletionList()

    prefix = _typed_prefix(text, character) if character > 0 else ""

    dot = character - len(prefix) - 1
    if character > 0 and 0 <= dot < len(text) and text[dot] == ".":
        receiver = _receiver(text, dot)
        if receiver is not None:
            name, literal_type = receiver
            if literal_type:
                return CompletionList(items=_LITERAL_METHODS[literal_type](prefix))
            if doc.ast is None:
                return CompletionList()
            return CompletionList(items=_member_items(build_symbol_table(doc.ast), name, prefix))

    items = [
        CompletionItem(label=kw, kind=CompletionItemKind.KEYWORD, detail="keyword")
        for kw in KEYWORDS
        if _matches(kw, prefix)
    ]
    items.extend(
        CompletionItem(label=label, kind=CompletionItemKind.OPERATOR, detail=detail)
        for label, detail in OPERATORS
        if _matches(label, prefix)
    )
    if doc.ast is not None:
        items.extend(_symbol_items(build_symbol_table(doc.ast), prefix))
    return CompletionList(items=items)
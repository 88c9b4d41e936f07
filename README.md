# ahoylsp

Editor intelligence for the Ahoy programming language. Given a parsed Ahoy
syntax tree and the text of a file, `ahoylsp` answers the questions an editor
asks of a language server, and returns Language Server Protocol shaped data
that can be sent to a client as JSON.

## What it provides

- **Syntax tree** (`ahoylsp.ast`): `NodeType`, `ASTNode` (with `walk()`, a
  pre-order traversal) and `ParseError`. Lines in the tree are one-based.
- **Symbol table** (`ahoylsp.symbol_table`): `build_symbol_table(ast)` walks the
  tree and records functions, parameters, variables, constants, enums, enum
  values and structs (including nested struct types) in nested scopes.
  `SymbolTable.lookup`, `get_struct_fields`, `get_all_symbols`,
  `find_symbol_at_position` and `find_references` query it.
- **Documents** (`ahoylsp.document`): `open_document(uri, text, ast, errors, version)`
  bundles the text, its lines, the tree, parse errors and the symbol table.
  Text larger than 5,000,000 bytes (UTF-8) raises `DocumentTooLargeError`.
  `Document.line_text(n)` returns a one-based line, or `""` when out of range.
- **Outline** (`ahoylsp.outline`): `document_symbols(symbol_table)` gives a flat
  list of `DocumentSymbol` entries for functions, enums, structs, constants and
  variables.
- **Go to definition** (`ahoylsp.definition`): `find_definition(doc, line, character)`
  returns the `Location` of the symbol under the cursor, or `None`.
  `get_word_at_position` returns the identifier touching a position.
- **Diagnostics** (`ahoylsp.diagnostics`, `ahoylsp.checks`, `ahoylsp.typecheck`):
  `collect_diagnostics(doc)` runs every check and converts parse errors.
  The checks report a misplaced program declaration, constant reassignment and
  redeclaration, variables colliding with constants, method calls on
  constants, unknown string/array/dict methods (with "did you mean"
  suggestions), return type violations and missing returns, duplicate enum
  members and enum names, undefined functions, undeclared identifiers, and
  argument count and argument type mismatches. Each check is also available on
  its own, for example `check_undefined_functions(doc)` or
  `check_type_mismatches(doc)`.
- **Completion** (`ahoylsp.completion`): `complete(doc, line, character)` offers
  keywords, word operators, user functions, variables, constants and enum
  values matching the word being typed. After a dot it offers string, array or
  dict methods (for literals and for variables of those types) or struct
  fields; after a constant it offers nothing.
- **Protocol data** (`ahoylsp.protocol`): dataclasses such as `Diagnostic`,
  `CompletionList`, `Location`, `Hover` and `DocumentSymbol`, and `to_json`.

## Using it

All positions passed to and returned by the functions are zero-based lines and
characters, as in the Language Server Protocol.

```python
from ahoylsp.document import open_document
from ahoylsp.diagnostics import collect_diagnostics
from ahoylsp.completion import complete
from ahoylsp.definition import find_definition
from ahoylsp.protocol import to_json

doc = open_document("file:///example.ahoy", text, ast, errors, 1)

for diagnostic in collect_diagnostics(doc):
    print(diagnostic.range.start.line, diagnostic.message)

items = complete(doc, 3, 7)
location = find_definition(doc, 3, 2)
payload = to_json(items)
```

Here `text` is the file contents, `ast` is an `ahoylsp.ast.ASTNode` tree for it
and `errors` is a list of `ahoylsp.ast.ParseError`.

`to_json` turns any of the protocol objects into plain dictionaries and lists
with camelCase field names, leaving out fields that are `None`, ready to be
serialised and sent to a client.

## What it does not do

- It does not parse Ahoy source: the syntax tree and parse errors must be
  supplied by the caller.
- It does not run a language server. There is no command, no JSON-RPC
  connection and no stdio loop; an editor integration has to receive requests,
  call these functions and send back the `to_json` results itself.
- It does not produce hover text.

## Requirements

Python 3.10 or later. The package has no runtime dependencies.
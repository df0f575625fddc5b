# copyrightlsp

A small language server that checks whether a document starts with a
header taken from a per-language template and, if not, reports an error
diagnostic and offers a code action that inserts one.

## Installation

```
pip install .
```

## Running

The server speaks the Language Server Protocol over standard input and
output and stops on an `exit` message or at the end of its input:

```
copyrightlsp
```

To write a log of the messages it handles, pass a log file (it is created
or truncated, with permissions `0600`):

```
copyrightlsp -logFile /tmp/copyrightlsp.log
```

## Configuration

Templates are sent by the client in a `workspace/didChangeConfiguration`
notification. Each language maps to a list of template lines; the
placeholder `{year}` matches any four-digit year and is replaced with the
current year when a header is inserted.

```json
{
  "settings": {
    "templates": {
      "python": ["# Maintained since {year} by the example team"],
      "c": ["/*", " * Maintained since {year} by the example team", " */"]
    },
    "searchRanges": {
      "python": 1
    }
  }
}
```

`searchRanges` lets a header start up to `n` lines below the top of the
document (for example after a shebang line). Values must be integers from
0 to 255; languages without a valid entry use `0`, so the header must
start on the first line. Invalid templates or ranges are skipped and
logged.

## Features

- Diagnostics: on open and on every change, a document whose language has
  a template but no matching header gets the error
  "No copyright header found!" on its first line.
- Code action: on the first line of such a document, "Add copyright header"
  inserts the template with the current year at the top.
- Handled methods: `initialize`, `shutdown`, `exit`,
  `textDocument/didOpen`, `textDocument/didChange`,
  `textDocument/didClose`, `textDocument/codeAction` and
  `workspace/didChangeConfiguration`. Other methods are ignored.

Documents are synced in full; the server advertises
`textDocumentSync: 1` and `codeActionProvider: true`.

## Library use

The pieces can be used on their own:

```python
from copyrightlsp.analysis import contains_copyright_string

contains_copyright_string(
    "#!/bin/sh\n# Maintained since 2024 by the example team\n",
    ["# Maintained since {year} by the example team"],
    1,
)  # True
```

- `copyrightlsp.analysis`: `matches_template_line`,
  `contains_template_lines`, `contains_copyright_string`.
- `copyrightlsp.rpc`: `encode_message`, `decode_message`,
  `parse_message_header`, `split` and `read_messages` for the base protocol
  framing; malformed messages raise `RpcError`.
- `copyrightlsp.state`: `State` holds open documents, templates and search
  ranges.
- `copyrightlsp.lsp`: protocol types (`Position`, `Range`, `TextEdit`,
  `WorkspaceEdit`, `CodeAction`, `Diagnostic`) and message builders.
- `copyrightlsp.diagnostics.calculate_diagnostics` and
  `copyrightlsp.codeactions.calculate_code_actions` compute results for a
  `State`.
- `copyrightlsp.server.Server` dispatches decoded messages and writes
  replies to a binary stream; `serve(reader)` runs the message loop.

## Limitations

Only full document sync is supported; incremental changes are not applied.
The `{year}` placeholder is the only one templates understand.

## Tests

```
pip install .[test]
pytest
```
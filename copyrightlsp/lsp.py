"""Types and message builders for the language server protocol."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

JSONRPC_VERSION = "2.0"
SERVER_NAME = "copyrightlsp"
SERVER_VERSION = "0.0.0"
DIAGNOSTIC_SOURCE = "copyrighlsp"


class DiagnosticSeverity(IntEnum):
    """Severity of a diagnostic."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class TextDocumentSyncKind(IntEnum):
    """How the client syncs document changes to the server."""

    NONE = 0
    FULL = 1
    INCREMENTAL = 2


def _unsigned(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class Position:
    """Zero-based line and character offset in a document."""

    line: int = 0
    character: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Position:
        """Build a position from its JSON form; missing fields are zero."""
        data = data or {}
        return cls(line=_unsigned(data, "line"), character=_unsigned(data, "character"))

    def to_dict(self) -> dict[str, int]:
        """Return the JSON form of the position."""
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    """A span between two positions in a document."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Range:
        """Build a range from its JSON form; missing fields are zero."""
        data = data or {}
        return cls(
            start=Position.from_dict(data.get("start")),
            end=Position.from_dict(data.get("end")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the range."""
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class TextEdit:
    """Replacement of a range of a document with new text."""

    new_text: str
    range: Range

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the edit."""
        return {"newText": self.new_text, "range": self.range.to_dict()}


@dataclass
class WorkspaceEdit:
    """Edits to apply to existing documents, keyed by document URI."""

    changes: dict[str, list[TextEdit]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the workspace edit."""
        return {
            "changes": {
                uri: [edit.to_dict() for edit in edits]
                for uri, edits in self.changes.items()
            }
        }


@dataclass
class CodeAction:
    """A titled action that applies a workspace edit."""

    edit: WorkspaceEdit
    title: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the code action."""
        return {"edit": self.edit.to_dict(), "title": self.title}


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported for a range of a document."""

    message: str
    source: str
    range: Range
    severity: DiagnosticSeverity

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the diagnostic."""
        return {
            "message": self.message,
            "source": self.source,
            "range": self.range.to_dict(),
            "severity": int(self.severity),
        }


def new_range(
    start_line: int, start_character: int, end_line: int, end_character: int
) -> Range:
    """Build a range from its four coordinates."""
    return Range(
        start=Position(line=start_line, character=start_character),
        end=Position(line=end_line, character=end_character),
    )


def new_error_diagnostic(message: str) -> Diagnostic:
    """Build an error diagnostic at the start of the document."""
    return Diagnostic(
        message=message,
        source=DIAGNOSTIC_SOURCE,
        range=new_range(0, 0, 0, 0),
        severity=DiagnosticSeverity.ERROR,
    )


def new_response(id: int) -> dict[str, Any]:
    """Build the common part of a response to the request ``id``."""
    return {"id": id, "jsonrpc": JSONRPC_VERSION}


def new_notification(method: str) -> dict[str, Any]:
    """Build the common part of a notification."""
    return {"jsonrpc": JSONRPC_VERSION, "method": method}


def new_initialize_response(id: int) -> dict[str, Any]:
    """Build the response to an ``initialize`` request."""
    return {
        **new_response(id),
        "result": {
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            "capabilities": {
                "textDocumentSync": int(TextDocumentSyncKind.FULL),
                "codeActionProvider": True,
            },
        },
    }


def new_shutdown_response(id: int) -> dict[str, Any]:
    """Build the response to a ``shutdown`` request."""
    return new_response(id)


def new_code_action_response(id: int, actions: Iterable[CodeAction]) -> dict[str, Any]:
    """Build the response to a ``textDocument/codeAction`` request."""
    return {**new_response(id), "result": [action.to_dict() for action in actions]}


def new_publish_diagnostics_notification(
    uri: str, diagnostics: Iterable[Diagnostic]
) -> dict[str, Any]:
    """Build a ``textDocument/publishDiagnostics`` notification."""
    return {
        **new_notification("textDocument/publishDiagnostics"),
        "params": {
            "uri": uri,
            "diagnostics": [diagnostic.to_dict() for diagnostic in diagnostics],
        },
    }
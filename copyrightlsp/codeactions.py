"""Code actions that insert a missing copyright notice."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from copyrightlsp.analysis import contains_copyright_string
from copyrightlsp.lsp import CodeAction, Position, TextEdit, WorkspaceEdit, new_range
from copyrightlsp.state import State

ADD_HEADER_TITLE = "Add copyright header"


def build_copyright_string(template: Iterable[str]) -> str:
    """Join the template lines and fill in the current year."""
    year = str(date.today().year)
    return "\n".join(template).replace("{year}", year)


def calculate_code_actions(
    lsp_state: State, document: str, start: Position, end: Position
) -> list[CodeAction]:
    """Return the code actions for the given document and range."""
    # actions are only offered on the first line of a document
    if start.line > 0 or end.line > 0:
        return []

    doc = lsp_state.documents.get(document)
    if doc is None:
        return []

    template_lines = lsp_state.templates.get(doc.language)
    if template_lines is None:
        return []

    search_range = lsp_state.get_search_range(doc.language)
    if contains_copyright_string(doc.content, template_lines, search_range):
        return []

    edit = TextEdit(
        new_text=build_copyright_string(template_lines) + "\n",
        range=new_range(0, 0, 0, 0),
    )
    return [
        CodeAction(
            edit=WorkspaceEdit(changes={document: [edit]}),
            title=ADD_HEADER_TITLE,
        )
    ]
"""Diagnostics for documents that lack a copyright notice."""

from __future__ import annotations

from copyrightlsp.analysis import contains_copyright_string
from copyrightlsp.lsp import Diagnostic, new_error_diagnostic
from copyrightlsp.state import State

MISSING_HEADER_MESSAGE = "No copyright header found!"


def calculate_diagnostics(lsp_state: State, document: str) -> list[Diagnostic]:
    """Return the diagnostics for the given document."""
    doc = lsp_state.documents.get(document)
    if doc is None:
        return []

    template_lines = lsp_state.templates.get(doc.language)
    if template_lines is None:
        return []

    search_range = lsp_state.get_search_range(doc.language)
    if contains_copyright_string(doc.content, template_lines, search_range):
        return []

    return [new_error_diagnostic(MISSING_HEADER_MESSAGE)]
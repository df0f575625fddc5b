"""Server state: open documents and client supplied configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DocumentInfo:
    """Language and current content of an open document."""

    language: str
    content: str


@dataclass
class State:
    """All state of the language server."""

    documents: dict[str, DocumentInfo] = field(default_factory=dict)
    templates: dict[str, list[str]] = field(default_factory=dict)
    search_ranges: dict[str, int] = field(default_factory=dict)

    def open_document(self, document: str, text: str, language: str) -> None:
        """Add the given document."""
        self.documents[document] = DocumentInfo(language=language, content=text)

    def update_document(self, document: str, text: str) -> None:
        """Replace the content of an open document; unknown documents are ignored."""
        info = self.documents.get(document)
        if info is None:
            return
        self.documents[document] = DocumentInfo(language=info.language, content=text)

    def close_document(self, document: str) -> None:
        """Forget the given document."""
        self.documents.pop(document, None)

    def update_templates(self, templates: Mapping[str, Sequence[str]] | None) -> None:
        """Replace the mapping of language to template lines."""
        self.templates = {
            language: list(lines) for language, lines in (templates or {}).items()
        }

    def update_search_ranges(self, search_ranges: Mapping[str, int] | None) -> None:
        """Replace the mapping of language to search range."""
        self.search_ranges = dict(search_ranges or {})

    def get_search_range(self, language: str) -> int:
        """Return the configured search range for a language, 0 if unset."""
        return self.search_ranges.get(language, 0)
"""Checks whether a document contains a copyright notice."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache

_YEAR_PLACEHOLDER = "{year}"
_YEAR_PATTERN = "[0-9]{4}"


@lru_cache(maxsize=256)
def _compile_template(template: str) -> re.Pattern[str]:
    parts = template.split(_YEAR_PLACEHOLDER)
    return re.compile(_YEAR_PATTERN.join(re.escape(part) for part in parts))


def matches_template_line(line: str, template: str) -> bool:
    """Return True if the whole line matches the template line.

    Every ``{year}`` placeholder in the template matches exactly four digits.
    """
    return _compile_template(template).fullmatch(line) is not None


def contains_template_lines(
    lines: Iterable[str] | None, template: Iterable[str] | None
) -> bool:
    """Return True if the lines hold the template lines as a consecutive block.

    Only the first line that matches the first template line is considered.
    """
    template = list(template or ())
    lines = list(lines or ())
    if not template:
        return False

    first, *rest = template
    for index, line in enumerate(lines):
        if not matches_template_line(line, first):
            continue

        candidates = lines[index + 1 : index + len(template)]
        if len(candidates) < len(rest):
            # not enough lines left to match the template
            return False

        return all(
            matches_template_line(candidate, template_line)
            for candidate, template_line in zip(candidates, rest)
        )

    return False


def contains_copyright_string(
    content: str, template_lines: Sequence[str] | None, search_range: int
) -> bool:
    """Return True if the template appears near the top of ``content``.

    The searched region covers the template's own length plus
    ``search_range`` additional lines.
    """
    if search_range < 0:
        raise ValueError("search range must not be negative")

    template = list(template_lines or ())
    limit = search_range + len(template)

    # the last piece holds the unsplit remainder, which is ignored
    lines = content.split("\n", limit)
    return contains_template_lines(lines[:limit], template)
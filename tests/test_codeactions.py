from datetime import date

import pytest

from copyrightlsp.analysis import contains_copyright_string, matches_template_line
from copyrightlsp.codeactions import build_copyright_string, calculate_code_actions
from copyrightlsp.lsp import Position, new_range
from copyrightlsp.state import State

URI = "file:///main.c"
TEMPLATE = ["/*", " * Notice (N) {year} AUTHOR", " */"]
ORIGIN = Position(0, 0)


@pytest.fixture
def state():
    lsp_state = State()
    lsp_state.update_templates({"c": TEMPLATE})
    return lsp_state


def test_build_copyright_string_fills_year():
    text = build_copyright_string(TEMPLATE)
    lines = text.split("\n")
    assert len(lines) == len(TEMPLATE)
    assert str(date.today().year) in lines[1]
    assert all(matches_template_line(line, tpl) for line, tpl in zip(lines, TEMPLATE))
    assert "{year}" not in text


def test_build_copyright_string_without_placeholder():
    assert build_copyright_string(["a", "b"]) == "a\nb"


def test_no_actions_outside_first_line(state):
    state.open_document(URI, "int main;", "c")
    assert calculate_code_actions(state, URI, Position(1, 0), Position(1, 0)) == []
    assert calculate_code_actions(state, URI, ORIGIN, Position(2, 0)) == []


def test_no_actions_for_unknown_document(state):
    assert calculate_code_actions(state, URI, ORIGIN, ORIGIN) == []


def test_no_actions_without_template(state):
    state.open_document(URI, "int main;", "go")
    assert calculate_code_actions(state, URI, ORIGIN, ORIGIN) == []


def test_no_actions_when_header_present(state):
    state.open_document(URI, "/*\n * Notice (N) 2024 AUTHOR\n */\nint main;", "c")
    assert calculate_code_actions(state, URI, ORIGIN, ORIGIN) == []


def test_action_inserts_header(state):
    content = "int main;"
    state.open_document(URI, content, "c")
    actions = calculate_code_actions(state, URI, ORIGIN, ORIGIN)
    assert len(actions) == 1
    action = actions[0]
    assert action.title == "Add copyright header"
    assert list(action.edit.changes) == [URI]
    (edit,) = action.edit.changes[URI]
    assert edit.range == new_range(0, 0, 0, 0)
    assert edit.new_text == build_copyright_string(TEMPLATE) + "\n"
    assert contains_copyright_string(edit.new_text + content, TEMPLATE, 0)


def test_action_respects_search_range(state):
    state.open_document(URI, "// intro\n/*\n * Notice (N) 2024 AUTHOR\n */", "c")
    assert len(calculate_code_actions(state, URI, ORIGIN, ORIGIN)) == 1
    state.update_search_ranges({"c": 1})
    assert calculate_code_actions(state, URI, ORIGIN, ORIGIN) == []
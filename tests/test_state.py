from copyrightlsp.state import DocumentInfo, State


def test_new_state_is_empty():
    state = State()
    assert state.documents == {}
    assert state.templates == {}
    assert state.search_ranges == {}


def test_open_document():
    state = State()
    state.open_document("file:///a.py", "print(1)", "python")
    assert state.documents["file:///a.py"] == DocumentInfo(language="python", content="print(1)")


def test_update_document_keeps_language():
    state = State()
    state.open_document("file:///a.py", "old", "python")
    state.update_document("file:///a.py", "new")
    assert state.documents["file:///a.py"] == DocumentInfo(language="python", content="new")


def test_update_unknown_document_is_ignored():
    state = State()
    state.update_document("file:///missing.py", "text")
    assert "file:///missing.py" not in state.documents


def test_close_document():
    state = State()
    state.open_document("file:///a.py", "x", "python")
    state.open_document("file:///b.py", "y", "python")
    state.close_document("file:///a.py")
    assert list(state.documents) == ["file:///b.py"]


def test_close_unknown_document_leaves_others():
    state = State()
    state.open_document("file:///a.py", "x", "python")
    state.close_document("file:///missing.py")
    assert list(state.documents) == ["file:///a.py"]


def test_update_templates_replaces_mapping():
    state = State()
    state.update_templates({"go": ["// Copyright {year}"]})
    state.update_templates({"python": ["# Copyright {year}"]})
    assert state.templates == {"python": ["# Copyright {year}"]}


def test_update_templates_with_none_clears():
    state = State()
    state.update_templates({"go": ["// Copyright {year}"]})
    state.update_templates(None)
    assert state.templates == {}


def test_get_search_range_configured():
    state = State()
    state.update_search_ranges({"python": 3})
    assert state.get_search_range("python") == 3


def test_get_search_range_defaults_to_zero():
    state = State()
    state.update_search_ranges({"python": 3})
    assert state.get_search_range("go") == 0


def test_update_search_ranges_with_none_clears():
    state = State()
    state.update_search_ranges({"python": 3})
    state.update_search_ranges(None)
    assert state.search_ranges == {}
    assert state.get_search_range("python") == 0
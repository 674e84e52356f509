from __future__ import annotations

import pytest

from ui.actions.actions_mixin import ActionsMixin


class _Table:
    def __init__(self):
        self.items = None

    def set_items(self, items):
        self.items = list(items)

    def row_for_key(self, key):
        return -1


class _Line:
    def __init__(self, text):
        self._text = text

    def text(self):
        return self._text


class _Editor:
    def __init__(self, exc):
        self.exc = exc

    def refresh(self):
        raise self.exc

    def lookup(self, key):
        raise self.exc


class _Window(ActionsMixin):
    """Handlers only; dialogs and status bar are recorded instead of shown."""

    def __init__(self, exc):
        self.editor = _Editor(exc)
        self.table_model = _Table()
        self.new_key_edit = _Line("lives")
        self.errors = []
        self.messages = []

    def _error(self, title, e):
        self.errors.append((title, str(e)))

    def _msg(self, s):
        self.messages.append(s)

    def _update_empty_hint(self):
        pass


_FAILURES = [ValueError("could not convert"), TypeError("not a number"), OSError("registry gone")]


@pytest.mark.parametrize("exc", _FAILURES)
def test_refresh_reports_and_shows_empty_list(exc):
    w = _Window(exc)
    w.on_refresh()
    assert w.errors == [("Refresh failed", str(exc))]
    assert w.table_model.items == []


@pytest.mark.parametrize("exc", _FAILURES)
def test_load_key_reports_read_errors(exc):
    w = _Window(exc)
    w.on_load_key()
    assert w.errors == [("Load failed", str(exc))]
    assert w.table_model.items is None

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from core.discovery import DiscoveryService, infer_pref_type
from core.errors import SubstrateUnavailable
from core.key_names import demangle
from core.prefs_store import InMemoryPrefsStore
from core.substrate import (
    REG_BINARY,
    REG_DWORD,
    REG_EXPAND_SZ,
    REG_QWORD,
    REG_SZ,
    UnavailableSubstrateReader,
)

from conftest import FailingReader, ListReader


def test_duplicate_hashed_names_yield_one_entry():
    store = InMemoryPrefsStore()
    store.set_int("score", 42)
    reader = ListReader([("score_h123", REG_DWORD), ("score_h456", REG_DWORD)])

    entries = DiscoveryService(reader, store).enumerate()

    assert len(entries) == 1
    assert entries[0].key == "score"
    assert entries[0].kind == "Int"
    assert entries[0].value == 42


def test_empty_substrate_yields_empty_list():
    assert DiscoveryService(ListReader([]), InMemoryPrefsStore()).enumerate() == []


def test_unavailable_reader_yields_empty_list():
    store = InMemoryPrefsStore()
    store.set_string("name", "bob")
    assert DiscoveryService(UnavailableSubstrateReader(), store).enumerate() == []


@pytest.mark.parametrize(
    "exc",
    [SubstrateUnavailable("no registry"), PermissionError("access denied"), OSError("gone")],
)
def test_substrate_errors_are_logged_not_raised(exc, caplog):
    svc = DiscoveryService(FailingReader(exc), InMemoryPrefsStore())
    with caplog.at_level("ERROR"):
        assert svc.enumerate() == []
    assert "Failed to read preferences" in caplog.text


def test_entries_are_typed_and_sorted():
    store = InMemoryPrefsStore()
    store.set_float("volume", 0.75)
    store.set_string("name", "Ann")
    store.set_int("lives", 3)
    reader = ListReader(
        [
            ("volume_h11", REG_BINARY),
            ("name_h22", REG_SZ),
            ("lives_h33", REG_DWORD),
        ]
    )

    entries = DiscoveryService(reader, store).enumerate()

    assert [(e.key, e.kind, e.value) for e in entries] == [
        ("lives", "Int", 3),
        ("name", "String", "Ann"),
        ("volume", "Float", 0.75),
    ]


def test_names_without_suffix_are_listed_as_is():
    store = InMemoryPrefsStore()
    store.set_string("plain", "x")
    entries = DiscoveryService(ListReader([("plain", REG_SZ)]), store).enumerate()
    assert [e.key for e in entries] == ["plain"]


def test_missing_value_reads_default():
    # Listed by the substrate but unknown to the store: accessor default.
    entries = DiscoveryService(ListReader([("ghost_h1", REG_DWORD)]), InMemoryPrefsStore()).enumerate()
    assert [(e.key, e.value) for e in entries] == [("ghost", 0)]


def test_type_mismatch_skips_only_that_entry(caplog):
    store = InMemoryPrefsStore()
    store.set_string("wrong", "text")
    store.set_int("right", 1)
    reader = ListReader([("wrong_h1", REG_DWORD), ("right_h2", REG_DWORD)])

    with caplog.at_level("WARNING"):
        entries = DiscoveryService(reader, store).enumerate()

    assert [e.key for e in entries] == ["right"]
    assert "wrong" in caplog.text


def test_empty_logical_key_is_skipped():
    entries = DiscoveryService(ListReader([("_h123", REG_SZ)]), InMemoryPrefsStore()).enumerate()
    assert entries == []


def test_each_call_reads_a_fresh_snapshot():
    store = InMemoryPrefsStore()
    store.set_int("a", 1)
    reader = ListReader([("a_h1", REG_DWORD)])
    svc = DiscoveryService(reader, store)

    assert svc.enumerate()[0].value == 1
    store.set_int("a", 2)
    reader.names.append(("b_h2", REG_DWORD))

    assert [(e.key, e.value) for e in svc.enumerate()] == [("a", 2), ("b", 0)]
    assert reader.calls == 2


@pytest.mark.parametrize(
    "tag, expected",
    [
        (REG_DWORD, "Int"),
        (REG_SZ, "String"),
        (REG_BINARY, "Float"),
        (REG_QWORD, "Float"),
        (REG_EXPAND_SZ, "Float"),
        (999, "Float"),
    ],
)
def test_infer_pref_type(tag, expected):
    assert infer_pref_type(tag) == expected


@given(st.integers(min_value=-1, max_value=20))
def test_inference_is_deterministic(tag):
    assert infer_pref_type(tag) == infer_pref_type(tag)


_names = st.builds(
    lambda k, h: f"{k}_h{h}" if h is not None else k,
    st.text(alphabet="abcXYZ_.", min_size=1, max_size=6),
    st.one_of(st.none(), st.integers(min_value=0, max_value=10 ** 6)),
)
_tags = st.sampled_from([REG_SZ, REG_BINARY, REG_DWORD, REG_QWORD])


@given(st.lists(st.tuples(_names, _tags), max_size=25))
def test_listing_is_sorted_and_unique(raw):
    store = InMemoryPrefsStore()
    first_kind = {}
    for name, tag in raw:
        key = demangle(name)
        if key and key not in first_kind:
            first_kind[key] = infer_pref_type(tag)
    for key, kind in first_kind.items():
        if kind == "Int":
            store.set_int(key, 1)
        elif kind == "String":
            store.set_string(key, "s")
        else:
            store.set_float(key, 1.5)

    entries = DiscoveryService(ListReader(raw), store).enumerate()
    keys = [e.key for e in entries]

    assert keys == sorted(keys)
    assert len(keys) == len(set(keys)) == len(first_kind)
    for e in entries:
        assert e.kind == first_kind[e.key]


class _BrokenFloatStore(InMemoryPrefsStore):
    """Float reads blow up the way undecodable raw data would."""

    def __init__(self, exc):
        super().__init__()
        self.exc = exc

    def get_float(self, key, default=0.0):
        if key == "odd":
            raise self.exc
        return super().get_float(key, default)


@pytest.mark.parametrize("exc", [ValueError("bad float"), TypeError("not a number"), OSError("read failed")])
def test_unreadable_entry_is_skipped(exc, caplog):
    store = _BrokenFloatStore(exc)
    store.set_int("lives", 3)
    reader = ListReader([("odd_h1", REG_EXPAND_SZ), ("lives_h2", REG_DWORD)])

    with caplog.at_level("WARNING"):
        entries = DiscoveryService(reader, store).enumerate()

    assert [(e.key, e.value) for e in entries] == [("lives", 3)]
    assert "Skipping 'odd'" in caplog.text

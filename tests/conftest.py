"""Shared fixtures: in-memory store plus fake registry readers."""

from __future__ import annotations

from typing import List

import pytest

from core.discovery import DiscoveryService
from core.edit_flow import PrefsEditor
from core.key_names import mangle
from core.prefs_store import InMemoryPrefsStore
from core.substrate import REG_BINARY, REG_DWORD, REG_SZ, RawValue

_TAG_FOR_KIND = {"Int": REG_DWORD, "String": REG_SZ, "Float": REG_BINARY}


class ListReader:
    """Reader returning a fixed list of (name, tag) pairs."""

    def __init__(self, names: List[RawValue]):
        self.names = list(names)
        self.calls = 0

    def read_names(self) -> List[RawValue]:
        self.calls += 1
        return list(self.names)


class FailingReader:
    def __init__(self, exc: Exception):
        self.exc = exc

    def read_names(self) -> List[RawValue]:
        raise self.exc


class StoreBackedReader:
    """Mimics the registry: one mangled value name per key in the store."""

    def __init__(self, store: InMemoryPrefsStore):
        self.store = store

    def read_names(self) -> List[RawValue]:
        return [(mangle(k), _TAG_FOR_KIND[kind]) for k, (kind, _v) in self.store.snapshot().items()]


@pytest.fixture
def store() -> InMemoryPrefsStore:
    return InMemoryPrefsStore()


@pytest.fixture
def editor(store: InMemoryPrefsStore) -> PrefsEditor:
    return PrefsEditor(store, DiscoveryService(StoreBackedReader(store), store))


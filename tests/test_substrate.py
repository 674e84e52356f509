from __future__ import annotations

import pytest

from core.app_identity import AppIdentity
from core.errors import SubstrateUnavailable
from core.substrate import RegistrySubstrateReader, UnavailableSubstrateReader, is_windows, select_reader


def test_reader_follows_runtime_platform(monkeypatch):
    ident = AppIdentity("A", "B")
    monkeypatch.setattr("core.substrate.platform.system", lambda: "Windows")
    assert isinstance(select_reader(ident), RegistrySubstrateReader)
    monkeypatch.setattr("core.substrate.platform.system", lambda: "Darwin")
    assert isinstance(select_reader(ident), UnavailableSubstrateReader)


def test_unavailable_reader_is_empty():
    assert UnavailableSubstrateReader().read_names() == []


@pytest.mark.skipif(is_windows(), reason="needs a platform without winreg")
def test_registry_reader_without_registry_raises_substrate_unavailable():
    with pytest.raises(SubstrateUnavailable):
        RegistrySubstrateReader(AppIdentity("A", "B")).read_names()

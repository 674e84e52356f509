from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol, Tuple

from .app_identity import AppIdentity
from .errors import TypeMismatch
from .model import PrefType, PrefValue
from .value_codec import INT32_MAX, INT32_MIN, to_float32

logger = logging.getLogger(__name__)

StoredValue = Tuple[PrefType, PrefValue]


class PreferenceStore(Protocol):
    """Key-value preference store scoped to one application identity."""

    def get_string(self, key: str, default: str = "") -> str: ...

    def get_int(self, key: str, default: int = 0) -> int: ...

    def get_float(self, key: str, default: float = 0.0) -> float: ...

    def set_string(self, key: str, value: str) -> None: ...

    def set_int(self, key: str, value: int) -> None: ...

    def set_float(self, key: str, value: float) -> None: ...

    def has_key(self, key: str) -> bool: ...

    def kind_of(self, key: str) -> Optional[PrefType]: ...

    def delete_key(self, key: str) -> None: ...

    def delete_all(self) -> None: ...

    def flush(self) -> None: ...


class TypedStoreBase:
    """Typed accessors on top of a raw ``(kind, value)`` read/write pair.

    Backends implement ``_read``/``_write`` plus delete/flush; the accessor
    checks (type mismatch, int32 range, float32 rounding) live here.
    """

    def _read(self, key: str) -> Optional[StoredValue]:
        raise NotImplementedError

    def _write(self, key: str, kind: PrefType, value: PrefValue) -> None:
        raise NotImplementedError

    def _get(self, key: str, expected: PrefType, default: PrefValue) -> PrefValue:
        stored = self._read(key)
        if stored is None:
            return default
        kind, value = stored
        if kind != expected:
            raise TypeMismatch(key, expected, kind)
        return value

    def get_string(self, key: str, default: str = "") -> str:
        return str(self._get(key, "String", default))

    def get_int(self, key: str, default: int = 0) -> int:
        return int(self._get(key, "Int", default))

    def get_float(self, key: str, default: float = 0.0) -> float:
        return float(self._get(key, "Float", default))

    def set_string(self, key: str, value: str) -> None:
        self._write(key, "String", str(value))

    def set_int(self, key: str, value: int) -> None:
        n = int(value)
        if n < INT32_MIN or n > INT32_MAX:
            raise ValueError(f"{n} does not fit in a 32-bit signed integer")
        self._write(key, "Int", n)

    def set_float(self, key: str, value: float) -> None:
        self._write(key, "Float", to_float32(value))

    def has_key(self, key: str) -> bool:
        return self._read(key) is not None

    def kind_of(self, key: str) -> Optional[PrefType]:
        stored = self._read(key)
        return None if stored is None else stored[0]


class InMemoryPrefsStore(TypedStoreBase):
    """Dict-backed store with the same contract as the real backends."""

    def __init__(self, items: Optional[Dict[str, StoredValue]] = None):
        self._items: Dict[str, StoredValue] = dict(items or {})
        self.flush_count = 0

    def _read(self, key: str) -> Optional[StoredValue]:
        return self._items.get(key)

    def _write(self, key: str, kind: PrefType, value: PrefValue) -> None:
        self._items[key] = (kind, value)

    def delete_key(self, key: str) -> None:
        self._items.pop(key, None)

    def delete_all(self) -> None:
        self._items.clear()

    def flush(self) -> None:
        self.flush_count += 1

    def snapshot(self) -> Dict[str, StoredValue]:
        return dict(self._items)


def open_default_store(identity: AppIdentity) -> PreferenceStore:
    """Open the platform's native store for ``identity``."""
    from .substrate import is_windows

    if is_windows():
        from .registry_store import RegistryPrefsStore

        return RegistryPrefsStore(identity)

    from .qsettings_store import QSettingsPrefsStore

    store = QSettingsPrefsStore.for_identity(identity)
    logger.info("Using QSettings store at %s", store.location())
    return store

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from PyQt6.QtCore import QSettings

from .app_identity import AppIdentity
from .model import PREF_TYPES, PrefType, PrefValue
from .prefs_store import StoredValue, TypedStoreBase

logger = logging.getLogger(__name__)


class QSettingsPrefsStore(TypedStoreBase):
    """INI-backed store for platforms without the engine's registry layout.

    Each value is written as ``"<Kind>:<text>"`` under a group named after the
    scope, so the declared kind survives the INI round trip. Keys are
    percent-encoded because QSettings treats ``/`` as a group separator.
    """

    def __init__(self, settings: QSettings, *, group: str = "editor"):
        self._settings = settings
        self._group = group

    @classmethod
    def for_identity(cls, identity: AppIdentity) -> "QSettingsPrefsStore":
        s = QSettings(
            QSettings.Format.IniFormat,
            QSettings.Scope.UserScope,
            identity.company,
            identity.product,
        )
        return cls(s, group=identity.scope)

    @classmethod
    def from_file(cls, path: Path, *, group: str = "editor") -> "QSettingsPrefsStore":
        return cls(QSettings(str(path), QSettings.Format.IniFormat), group=group)

    def location(self) -> str:
        return self._settings.fileName()

    def _qkey(self, key: str) -> str:
        return f"{self._group}/{quote(key, safe='')}"

    def _read(self, key: str) -> Optional[StoredValue]:
        raw = self._settings.value(self._qkey(key))
        if raw is None:
            return None
        kind, _, text = str(raw).partition(":")
        if kind not in PREF_TYPES:
            # Written by something else; treat as a plain string.
            return "String", str(raw)
        try:
            if kind == "Int":
                return kind, int(text)
            if kind == "Float":
                return kind, float(text)
        except ValueError:
            # Hand-edited number that no longer parses; keep the raw text.
            logger.warning("Stored value for %r is not a valid %s: %r", key, kind, text)
            return "String", str(raw)
        return kind, text

    def _write(self, key: str, kind: PrefType, value: PrefValue) -> None:
        text = repr(float(value)) if kind == "Float" else str(value)
        self._settings.setValue(self._qkey(key), f"{kind}:{text}")

    def delete_key(self, key: str) -> None:
        self._settings.remove(self._qkey(key))

    def delete_all(self) -> None:
        self._settings.beginGroup(self._group)
        try:
            self._settings.remove("")
        finally:
            self._settings.endGroup()

    def flush(self) -> None:
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise OSError(f"Failed to write {self.location()}: {status.name}")

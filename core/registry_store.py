from __future__ import annotations

import struct
from typing import Optional

from .app_identity import AppIdentity
from .discovery import infer_pref_type
from .key_names import mangle
from .model import PrefType, PrefValue
from .prefs_store import StoredValue, TypedStoreBase
from .substrate import REG_BINARY, REG_DWORD, REG_SZ


class RegistryPrefsStore(TypedStoreBase):
    """The engine's Windows store: one registry value per key.

    Value names are ``<key>_h<hash>``. Ints are REG_DWORD, strings REG_SZ and
    floats an 8-byte little-endian double in REG_BINARY (a 4-byte single is
    also accepted on read). Each call opens and closes the key.
    """

    def __init__(self, identity: AppIdentity, *, winreg_module=None):
        if winreg_module is None:
            import winreg as winreg_module

        self._winreg = winreg_module
        self.identity = identity
        self.path = identity.registry_path()

    def _open(self, write: bool = False):
        reg = self._winreg
        if write:
            return reg.CreateKeyEx(reg.HKEY_CURRENT_USER, self.path, 0, reg.KEY_ALL_ACCESS)
        return reg.OpenKey(reg.HKEY_CURRENT_USER, self.path, 0, reg.KEY_READ)

    def _read(self, key: str) -> Optional[StoredValue]:
        try:
            with self._open() as hkey:
                data, tag = self._winreg.QueryValueEx(hkey, mangle(key))
        except FileNotFoundError:
            return None

        kind = infer_pref_type(tag)
        if kind == "Int":
            n = int(data) & 0xFFFFFFFF
            return kind, (n - (1 << 32) if n & 0x80000000 else n)
        if kind == "String":
            return kind, str(data)
        return kind, _decode_float(data)

    def _write(self, key: str, kind: PrefType, value: PrefValue) -> None:
        with self._open(write=True) as hkey:
            name = mangle(key)
            if kind == "Int":
                self._winreg.SetValueEx(hkey, name, 0, REG_DWORD, int(value) & 0xFFFFFFFF)
            elif kind == "String":
                self._winreg.SetValueEx(hkey, name, 0, REG_SZ, str(value))
            else:
                self._winreg.SetValueEx(hkey, name, 0, REG_BINARY, struct.pack("<d", float(value)))

    def delete_key(self, key: str) -> None:
        try:
            with self._open(write=True) as hkey:
                self._winreg.DeleteValue(hkey, mangle(key))
        except FileNotFoundError:
            pass

    def delete_all(self) -> None:
        reg = self._winreg
        try:
            with self._open(write=True) as hkey:
                _subkeys, n_values, _mtime = reg.QueryInfoKey(hkey)
                names = [reg.EnumValue(hkey, i)[0] for i in range(n_values)]
                for name in names:
                    reg.DeleteValue(hkey, name)
        except FileNotFoundError:
            pass

    def flush(self) -> None:
        try:
            with self._open() as hkey:
                self._winreg.FlushKey(hkey)
        except FileNotFoundError:
            pass


def _decode_float(data) -> float:
    if isinstance(data, (bytes, bytearray)):
        if len(data) >= 8:
            return struct.unpack("<d", bytes(data[:8]))[0]
        if len(data) >= 4:
            return struct.unpack("<f", bytes(data[:4]))[0]
        return 0.0
    # REG_EXPAND_SZ, REG_MULTI_SZ, REG_NONE and friends land here too
    try:
        return float(data)
    except (TypeError, ValueError):
        return 0.0

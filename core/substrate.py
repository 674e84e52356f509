from __future__ import annotations

import logging
import platform
from contextlib import contextmanager
from typing import Iterator, List, Protocol, Tuple

from .app_identity import AppIdentity
from .errors import SubstrateUnavailable

logger = logging.getLogger(__name__)

# Storage kind tags as reported by the Windows registry (winreg.REG_*).
# Kept as plain ints so the discovery code never imports winreg.
REG_SZ = 1
REG_EXPAND_SZ = 2
REG_BINARY = 3
REG_DWORD = 4
REG_QWORD = 11

RawValue = Tuple[str, int]


class RawSubstrateReader(Protocol):
    """Read-only view of the storage underneath a preference store."""

    def read_names(self) -> List[RawValue]:
        """Return ``(value name, storage kind tag)`` pairs.

        An absent store yields ``[]``. Unreadable storage raises
        ``SubstrateUnavailable`` (or ``OSError``).
        """
        ...


class UnavailableSubstrateReader:
    """Platforms whose storage cannot be enumerated."""

    def read_names(self) -> List[RawValue]:
        return []


class RegistrySubstrateReader:
    """Enumerates the identity's sub-key under HKEY_CURRENT_USER.

    The key handle is opened and closed inside each ``read_names()`` call.
    """

    def __init__(self, identity: AppIdentity):
        self.identity = identity

    @contextmanager
    def _open(self) -> Iterator[object]:
        try:
            import winreg
        except ImportError as e:
            raise SubstrateUnavailable("Windows registry is not available on this platform") from e

        path = self.identity.registry_path()
        try:
            key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, path, 0, winreg.KEY_READ)
        except FileNotFoundError:
            # Nothing has been saved for this product yet.
            yield None
            return
        except OSError as e:
            raise SubstrateUnavailable(f"Cannot open HKCU\\{path}: {e}") from e
        try:
            yield key
        finally:
            winreg.CloseKey(key)

    def read_names(self) -> List[RawValue]:
        out: List[RawValue] = []
        with self._open() as key:
            if key is None:
                return out
            import winreg

            _subkeys, n_values, _mtime = winreg.QueryInfoKey(key)
            for i in range(n_values):
                name, _data, kind = winreg.EnumValue(key, i)
                out.append((name, int(kind)))
        return out


def is_windows() -> bool:
    return platform.system().lower() == "windows"


def select_reader(identity: AppIdentity) -> RawSubstrateReader:
    """Pick the substrate reader for the platform we are running on."""
    if is_windows():
        return RegistrySubstrateReader(identity)
    logger.info("Key discovery is not supported on %s; add keys manually.", platform.system())
    return UnavailableSubstrateReader()

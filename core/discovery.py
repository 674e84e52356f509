"""Key discovery for preference stores that cannot list their own keys.

The engine's store offers get/set/has but no enumeration. On Windows the
values live in the registry, so listing them means reading the registry
directly:

    1. Read ``(value name, kind tag)`` pairs from the substrate reader.
    2. Strip the engine's ``_h<digits>`` hash suffix from each name.
    3. Drop logical keys already seen in this pass (first one wins).
    4. Infer the logical type from the registry kind tag.
    5. Read the typed value back through the store.
    6. Sort by key.

Any failure to read the substrate is logged and reported as an empty list.
An entry whose value cannot be read back is logged and left out.
"""

from __future__ import annotations

import logging
from typing import List, Set

from .errors import SubstrateUnavailable, TypeMismatch
from .key_names import demangle
from .model import PrefType, PreferenceEntry, PrefValue
from .prefs_store import PreferenceStore
from .substrate import REG_DWORD, REG_SZ, RawSubstrateReader

logger = logging.getLogger(__name__)


def infer_pref_type(kind_tag: int) -> PrefType:
    """Map a registry kind tag to a logical type.

    Anything that is neither a DWORD nor a string is assumed to be a float,
    since the engine writes floats as binary blobs. Other exotic kinds land
    in the same bucket.
    """
    if kind_tag == REG_DWORD:
        return "Int"
    if kind_tag == REG_SZ:
        return "String"
    return "Float"


def read_typed(store: PreferenceStore, key: str, kind: PrefType) -> PrefValue:
    if kind == "Int":
        return store.get_int(key)
    if kind == "String":
        return store.get_string(key)
    return store.get_float(key)


class DiscoveryService:
    def __init__(self, reader: RawSubstrateReader, store: PreferenceStore):
        self.reader = reader
        self.store = store

    def _raw_names(self):
        try:
            return list(self.reader.read_names())
        except (SubstrateUnavailable, OSError) as e:
            logger.error("Failed to read preferences from storage: %s", e)
            return []

    def enumerate(self) -> List[PreferenceEntry]:
        seen: Set[str] = set()
        entries: List[PreferenceEntry] = []

        for name, kind_tag in self._raw_names():
            key = demangle(name)
            if not key or key in seen:
                continue
            seen.add(key)

            kind = infer_pref_type(kind_tag)
            try:
                value = read_typed(self.store, key, kind)
            except (TypeMismatch, ValueError, TypeError, OSError) as e:
                logger.warning("Skipping '%s': %s", key, e)
                continue
            entries.append(PreferenceEntry(key=key, kind=kind, value=value))

        entries.sort(key=lambda e: e.key)
        logger.debug("Discovered %d preference(s)", len(entries))
        return entries

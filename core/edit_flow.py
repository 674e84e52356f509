from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .discovery import DiscoveryService, read_typed
from .errors import DuplicateKey, EmptyKey, ParseFailure
from .model import EditableEntry, PrefType, PreferenceEntry, PrefValue
from .prefs_store import PreferenceStore
from .value_codec import format_pref_value, parse_pref_value

logger = logging.getLogger(__name__)

# confirm(title, message) -> True to proceed
ConfirmFn = Callable[[str, str], bool]


def editable(entry: PreferenceEntry) -> EditableEntry:
    return EditableEntry(entry=entry, text=format_pref_value(entry.kind, entry.value))


class PrefsEditor:
    """Add / edit / delete operations; every mutation is flushed at once.

    Mutations go straight to the store. The discovery service is only used
    to build a fresh listing.
    """

    def __init__(self, store: PreferenceStore, discovery: DiscoveryService):
        self.store = store
        self.discovery = discovery

    def refresh(self) -> List[EditableEntry]:
        return [editable(e) for e in self.discovery.enumerate()]

    def lookup(self, key: str) -> Optional[PreferenceEntry]:
        """Read one entry by name, for stores whose keys cannot be listed."""
        if not key:
            raise EmptyKey()
        kind = self.store.kind_of(key)
        if kind is None:
            return None
        return PreferenceEntry(key=key, kind=kind, value=read_typed(self.store, key, kind))

    def _write(self, key: str, kind: PrefType, value: PrefValue) -> None:
        if kind == "Int":
            self.store.set_int(key, value)  # type: ignore[arg-type]
        elif kind == "Float":
            self.store.set_float(key, value)  # type: ignore[arg-type]
        else:
            self.store.set_string(key, value)  # type: ignore[arg-type]
        self.store.flush()

    def add(self, key: str, kind: PrefType, text: str) -> PreferenceEntry:
        if not key:
            raise EmptyKey()
        if self.store.has_key(key):
            raise DuplicateKey(key)
        value = parse_pref_value(kind, text)
        self._write(key, kind, value)
        logger.info("PlayerPref '%s' added.", key)
        return PreferenceEntry(key=key, kind=kind, value=value)

    def save(self, item: EditableEntry) -> PreferenceEntry:
        """Write ``item.text`` back using the entry's existing kind.

        On a parse error the edit buffer is restored to the last saved value
        and ``ParseFailure`` propagates; the store is left untouched.
        """
        try:
            value = parse_pref_value(item.kind, item.text)
        except ParseFailure:
            item.text = format_pref_value(item.kind, item.entry.value)
            raise
        self._write(item.key, item.kind, value)
        item.entry = PreferenceEntry(key=item.key, kind=item.kind, value=value)
        item.text = format_pref_value(item.kind, value)
        logger.info("PlayerPref '%s' saved.", item.key)
        return item.entry

    def delete(self, key: str, confirm: ConfirmFn) -> bool:
        if not confirm("Delete PlayerPref", f"Delete key '{key}'?"):
            return False
        self.store.delete_key(key)
        self.store.flush()
        logger.info("PlayerPref '%s' deleted.", key)
        return True

    def delete_all(self, confirm: ConfirmFn) -> bool:
        if not confirm(
            "Delete all PlayerPrefs",
            "Really delete every PlayerPref?\nThis cannot be undone.",
        ):
            return False
        self.store.delete_all()
        self.store.flush()
        logger.info("All PlayerPrefs deleted.")
        return True

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

# Logical kinds as shown in the editor. The names match the accessor suffixes
# (get_string / get_int / get_float).
PrefType = Literal["String", "Int", "Float"]

PREF_TYPES: tuple = ("String", "Int", "Float")

PrefValue = Union[str, int, float]


@dataclass(frozen=True)
class PreferenceEntry:
    key: str
    kind: PrefType
    value: PrefValue


@dataclass
class EditableEntry:
    """A discovered entry plus the text currently shown in its value cell.

    ``entry`` is the last value known to be in the store; ``text`` is the
    user's edit buffer and may be anything until it is saved.
    """

    entry: PreferenceEntry
    text: str = ""

    @property
    def key(self) -> str:
        return self.entry.key

    @property
    def kind(self) -> PrefType:
        return self.entry.kind

    @property
    def dirty(self) -> bool:
        from .value_codec import format_pref_value

        return self.text != format_pref_value(self.entry.kind, self.entry.value)

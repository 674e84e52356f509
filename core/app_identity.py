from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Scope = Literal["editor", "player"]


@dataclass(frozen=True)
class AppIdentity:
    """Company + product pair that scopes which preferences are visible.

    ``scope`` picks between the editor's store (entries written while
    playing inside the editor) and a standalone player build's store.
    """

    company: str
    product: str
    scope: Scope = "editor"

    def registry_path(self) -> str:
        """Sub-key under HKEY_CURRENT_USER holding this identity's values."""
        if self.scope == "editor":
            return f"Software\\Unity\\UnityEditor\\{self.company}\\{self.product}"
        return f"Software\\{self.company}\\{self.product}"

    def label(self) -> str:
        return f"{self.company} / {self.product} ({self.scope})"

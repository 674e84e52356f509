from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .app_identity import AppIdentity
from .app_paths import get_writable_data_dir
from .fs_atomic import atomic_write_json

logger = logging.getLogger(__name__)

SETTINGS_FILE = "editor_settings.json"
MAX_RECENT = 10


@dataclass
class EditorSettings:
    """Editor-side settings stored in ``editor_settings.json``.

    Nothing here is written into the preference store itself; it only
    remembers which project the editor was last pointed at.
    """

    company: str = "DefaultCompany"
    product: str = "MyGame"
    scope: str = "editor"
    dark_mode: bool = True
    recent: List[Dict[str, str]] = field(default_factory=list)

    _path: Optional[Path] = None

    def identity(self) -> AppIdentity:
        scope = self.scope if self.scope in ("editor", "player") else "editor"
        return AppIdentity(company=self.company, product=self.product, scope=scope)  # type: ignore[arg-type]

    def to_json(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "product": self.product,
            "scope": self.scope,
            "dark_mode": self.dark_mode,
            "recent": list(self.recent),
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any], path: Optional[Path] = None) -> "EditorSettings":
        d = cls()
        recent = obj.get("recent")
        return cls(
            company=str(obj.get("company") or d.company),
            product=str(obj.get("product") or d.product),
            scope=str(obj.get("scope") or d.scope),
            dark_mode=bool(obj.get("dark_mode", d.dark_mode)),
            recent=[dict(r) for r in recent if isinstance(r, dict)] if isinstance(recent, list) else [],
            _path=path,
        )

    @classmethod
    def load(cls, path: Path) -> "EditorSettings":
        if not path.exists():
            return cls(_path=path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            return cls(_path=path)
        if not isinstance(raw, dict):
            return cls(_path=path)
        return cls.from_json(raw, path)

    @classmethod
    def load_default(cls, base_dir: Path) -> "EditorSettings":
        return cls.load(get_writable_data_dir(base_dir) / SETTINGS_FILE)

    def save(self) -> None:
        """Persist to disk. IO errors are logged, never raised."""
        if not self._path:
            return
        try:
            atomic_write_json(self._path, self.to_json())
        except OSError as e:
            logger.warning("Could not save %s: %s", self._path, e)

    def remember(self, identity: AppIdentity) -> None:
        """Make ``identity`` current and move it to the front of the recent list."""
        self.company = identity.company
        self.product = identity.product
        self.scope = identity.scope
        rec = {"company": identity.company, "product": identity.product, "scope": identity.scope}
        self.recent = [rec] + [r for r in self.recent if r != rec]
        del self.recent[MAX_RECENT:]
        self.save()

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "playerprefs-editor"


def _is_portable_mode(base_dir: Path) -> bool:
    """Return True if editor data should live beside the project.

    Portable mode is enabled by:
      - environment variable PREFS_EDITOR_PORTABLE=1, or
      - a file named 'portable.flag' inside <base_dir>/data
    """
    if os.environ.get("PREFS_EDITOR_PORTABLE", "").strip() == "1":
        return True
    try:
        return (Path(base_dir) / "data" / "portable.flag").exists()
    except OSError:
        return False


def _qt_app_data_dir(app_name: str) -> Path | None:
    """Return per-user application data directory using Qt QStandardPaths."""
    from PyQt6.QtCore import QStandardPaths

    loc = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppLocalDataLocation)
    if not loc:
        loc = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if not loc:
        return None
    p = Path(loc) / app_name
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return p


def get_writable_data_dir(base_dir: Path, *, app_name: str = APP_NAME) -> Path:
    """Return a stable writable directory for editor-side data.

    Default behavior stores data in the user's per-app data directory using
    Qt QStandardPaths. Portable mode stores data in <base_dir>/data.

    Always returns a directory that exists (created if needed).
    """
    base_dir = Path(base_dir)

    if _is_portable_mode(base_dir):
        data_dir = base_dir / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    qt_dir = _qt_app_data_dir(app_name)
    if qt_dir is not None:
        return qt_dir

    # Fallback: project-local data/
    data_dir = base_dir / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir

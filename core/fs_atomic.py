from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _commit_with_qsavefile(path: Path, data: bytes) -> bool:
    """Write through QSaveFile; False means the caller should fall back."""
    from PyQt6.QtCore import QIODevice, QSaveFile

    f = QSaveFile(str(path))
    if not f.open(QIODevice.OpenModeFlag.WriteOnly):
        logger.debug("QSaveFile could not open %s: %s", path, f.errorString())
        return False
    if f.write(data) == -1:
        f.cancelWriting()
        return False
    return f.commit()


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` so readers never see a partial file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if _commit_with_qsavefile(path, data):
        return

    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


def atomic_write_json(path: Path, obj: Any, *, indent: int = 2) -> None:
    text = json.dumps(obj, indent=indent, ensure_ascii=False)
    atomic_write_bytes(Path(path), text.encode("utf-8"))

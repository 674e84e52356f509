from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from core.app_identity import AppIdentity
from core.editor_settings import EditorSettings
from ui.main_window import MainWindow


def _parse_args(argv):
    ap = argparse.ArgumentParser(description="Inspect and edit a game's PlayerPrefs.")
    ap.add_argument("--company", help="Company name the preferences are stored under.")
    ap.add_argument("--product", help="Product name the preferences are stored under.")
    ap.add_argument("--scope", choices=["editor", "player"], help="Editor play-mode store or standalone player store.")
    # parse_known_args leaves Qt's own flags (-style, -platform, ...) alone
    args, _qt_args = ap.parse_known_args(argv)
    return args


def _setup_logging() -> None:
    level = os.environ.get("PREFS_EDITOR_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    _setup_logging()
    args = _parse_args(sys.argv[1:])

    app = QApplication(sys.argv)

    settings = EditorSettings.load_default(Path(__file__).resolve().parent)
    base = settings.identity()
    identity = AppIdentity(
        company=args.company or base.company,
        product=args.product or base.product,
        scope=args.scope or base.scope,
    )

    w = MainWindow(settings=settings, identity=identity)
    w.resize(900, 650)
    w.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

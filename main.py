import argparse
import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.exceptions import StoreUnavailable
from database.transaction_dao import TransactionDAO
from services.transaction_service import TransactionService
from ui.app_window import AppWindow
from utils.app_config import (
    get_db_folder, get_setting, load_config, resolve_db_path, set_db_folder,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Savr personal finance tracker")
    parser.add_argument(
        "--db", help="Open this database file for this run only."
    )
    parser.add_argument(
        "--db-folder", help="Folder holding savr.db; remembered for later runs."
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ── Bootstrap: read DB location and preferences from pre-DB config ───────
    if args.db_folder:
        set_db_folder(args.db_folder)
    config = load_config()
    db_path = args.db or resolve_db_path(get_db_folder(config))

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager(db_path)
    try:
        db.initialize()
    except StoreUnavailable as e:
        logger.error("Cannot start: %s", e)
        from tkinter import messagebox
        messagebox.showerror("Savr", f"Could not open the database:\n{e}")
        return 1

    tx_svc = TransactionService(TransactionDAO(db))

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(get_setting("appearance_mode", config))
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(tx_service=tx_svc, date_format=get_setting("date_format", config))

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    try:
        app.mainloop()
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
ChemCheck — Local JSON storage for check history and settings.

Data is persisted in ``<project>/data/chemcheck.json`` unless the
``CHEMCHECK_DATA_DIR`` environment variable names another directory.
"""

import json
import logging
import os
import time
import uuid
from datetime import datetime

logger = logging.getLogger(__name__)

_DATA_DIR = os.environ.get(
    "CHEMCHECK_DATA_DIR",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data"),
)
_DATA_FILE = os.path.join(_DATA_DIR, "chemcheck.json")

# ── Default settings ────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "history_limit": 100,
    "show_steps": True,        # print the step trail in the console
    "record_history": True,
}


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _empty_db() -> dict:
    return {"settings": dict(DEFAULT_SETTINGS), "history": []}


def _load_db() -> dict:
    _ensure_dir()
    if os.path.exists(_DATA_FILE):
        try:
            with open(_DATA_FILE, "r", encoding="utf-8") as f:
                db = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("ignoring unreadable %s: %s", _DATA_FILE, e)
        else:
            if isinstance(db, dict):
                db.setdefault("settings", dict(DEFAULT_SETTINGS))
                db.setdefault("history", [])
                return db
    return _empty_db()


def _save_db(db: dict) -> None:
    _ensure_dir()
    with open(_DATA_FILE, "w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)


# ── Settings ─────────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return stored settings merged over the defaults."""
    merged = dict(DEFAULT_SETTINGS)
    merged.update(_load_db()["settings"])
    return merged


def save_settings(settings: dict) -> None:
    db = _load_db()
    db["settings"] = settings
    _save_db(db)


# ── History ──────────────────────────────────────────────────────────────

def add_history(kind: str, query: str, answer: str) -> str:
    """Record one check (newest first). Returns the record id."""
    db = _load_db()
    limit = {**DEFAULT_SETTINGS, **db["settings"]}["history_limit"]
    record = {
        "id": uuid.uuid4().hex,
        "kind": kind,
        "query": query,
        "answer": answer,
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "epoch": time.time(),
    }
    db["history"].insert(0, record)
    db["history"] = db["history"][:limit]
    _save_db(db)
    return record["id"]


def get_history() -> list[dict]:
    """Return the history list (newest first)."""
    return _load_db()["history"]


def delete_history_item(record_id: str) -> None:
    db = _load_db()
    db["history"] = [r for r in db["history"] if r.get("id") != record_id]
    _save_db(db)


def clear_history() -> None:
    """Remove all history entries."""
    db = _load_db()
    db["history"] = []
    _save_db(db)


def clear_all_data() -> None:
    """Reset settings and history to a fresh state."""
    _save_db(_empty_db())

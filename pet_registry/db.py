from __future__ import annotations

# pet_registry/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

import yaml

from .errors import StorageError

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) environment variable PET_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: Data.db in the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "Data.db")


def _read_config_yaml(cfg_path: str | None = None) -> dict:
    cfg_path = cfg_path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        logger.warning("ignoring config %s: top level is not a mapping", cfg_path)
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path(cfg_path: str | None = None) -> str:
    env_path = os.environ.get("PET_DB_PATH")
    cfg = _read_config_yaml(cfg_path)
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _DEFAULT_DB

    # make sure the parent directory exists
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection to ``db_path`` for the duration of the block.
    Foreign keys are on, rows come back as ``sqlite3.Row`` and the connection
    runs in autocommit mode, so callers open transactions explicitly.
    Any ``sqlite3.Error`` escaping the block is re-raised as ``StorageError``.
    The connection is closed on every exit path.
    """
    try:
        conn = sqlite3.connect(
            db_path,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
            check_same_thread=False,
            isolation_level=None,
        )
    except sqlite3.Error as e:
        raise StorageError(f"cannot open database {db_path}: {e}") from e
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    except sqlite3.Error as e:
        logger.error("storage error on %s: %s", db_path, e)
        raise StorageError(str(e)) from e
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the block inside ``BEGIN IMMEDIATE``; commit on success, roll back on error."""
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()

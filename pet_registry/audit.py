"""Change history of the registry.

Every add-owner, add-pet and phone-change attempt leaves one ``registry_change`` row,
keyed by the owner or pet it touched. Attempts that failed before an id existed keep
``entity_id`` empty.
"""
from __future__ import annotations

import datetime as dt
import json
import time
from sqlite3 import Connection
from typing import Any

from .db import get_conn

ENTITY_OWNER = "owner"
ENTITY_PET = "pet"
ENTITY_TYPES = (ENTITY_OWNER, ENTITY_PET)

RESULT_OK = "OK"
RESULT_ERROR = "ERROR"
RESULT_REJECTED = "REJECTED"


def ensure_audit_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS registry_change (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts TEXT NOT NULL,
            action TEXT NOT NULL,
            entity_type TEXT NOT NULL CHECK (entity_type IN ('owner', 'pet')),
            entity_id INTEGER,
            result TEXT NOT NULL,
            detail TEXT,
            changes_json TEXT,
            duration_ms INTEGER
        )
        """
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_change_entity ON registry_change(entity_type, entity_id)"
    )


class ChangeRecorder:
    """Collects what one operation did to an owner or pet, then stores it with ``commit``."""

    def __init__(self, db_path: str, action: str, entity_type: str):
        if entity_type not in ENTITY_TYPES:
            raise ValueError(f"unknown entity type {entity_type}")
        self.db_path = db_path
        self.action = action
        self.entity_type = entity_type
        self.entity_id: int | None = None
        self.changes: dict[str, Any] = {}
        self.start = time.perf_counter()

    def bind(self, entity_id: int):
        self.entity_id = int(entity_id)

    def note(self, **changes):
        self.changes.update(changes)

    def commit(self, result: str = RESULT_OK, detail: str | None = None):
        with get_conn(self.db_path) as conn:
            conn.execute(
                "INSERT INTO registry_change"
                "(ts, action, entity_type, entity_id, result, detail, changes_json, duration_ms) "
                "VALUES(?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    dt.datetime.now(dt.timezone.utc).isoformat(),
                    self.action,
                    self.entity_type,
                    self.entity_id,
                    result,
                    detail,
                    json.dumps(self.changes, ensure_ascii=False) if self.changes else None,
                    int((time.perf_counter() - self.start) * 1000),
                ),
            )


def entity_history(
    db_path: str,
    entity_type: str,
    entity_id: int | None = None,
    action: str | None = None,
    result: str | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[int, list[dict[str, Any]]]:
    """Changes recorded for one entity type (optionally one entity), newest first."""
    where = ["entity_type = ?"]
    params: list[Any] = [entity_type]
    if entity_id is not None:
        where.append("entity_id = ?")
        params.append(int(entity_id))
    if action:
        where.append("action = ?")
        params.append(action)
    if result:
        where.append("result = ?")
        params.append(result)
    wh = " WHERE " + " AND ".join(where)
    page = max(page, 1)
    with get_conn(db_path) as conn:
        total = conn.execute(f"SELECT COUNT(1) AS c FROM registry_change{wh}", params).fetchone()["c"]
        rows = conn.execute(
            "SELECT id, ts, action, entity_type, entity_id, result, detail, changes_json "
            f"FROM registry_change{wh} ORDER BY id DESC LIMIT ? OFFSET ?",
            [*params, size, (page - 1) * size],
        ).fetchall()
    items = []
    for r in rows:
        it = dict(r)
        raw = it.pop("changes_json")
        it["changes"] = json.loads(raw) if raw else {}
        items.append(it)
    return int(total), items

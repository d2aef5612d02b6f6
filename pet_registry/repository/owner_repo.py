from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS owner (
            id INTEGER PRIMARY KEY,
            phone TEXT NOT NULL,
            address TEXT NOT NULL,
            name TEXT NOT NULL
        )
        """
    )
    conn.execute("CREATE UNIQUE INDEX IF NOT EXISTS idx_owner_phone ON owner(phone)")


def insert_owner(conn: Connection, name: str, phone: str, address: str) -> int:
    cur = conn.execute(
        "INSERT INTO owner(name, phone, address) VALUES(?, ?, ?)",
        (name, phone, address),
    )
    return int(cur.lastrowid)


def id_by_phone(conn: Connection, phone: str) -> Optional[int]:
    row = conn.execute("SELECT id FROM owner WHERE phone=?", (phone,)).fetchone()
    return int(row["id"]) if row else None


def exists(conn: Connection, owner_id: int) -> bool:
    row = conn.execute("SELECT 1 FROM owner WHERE id=?", (owner_id,)).fetchone()
    return row is not None


def get_one(conn: Connection, owner_id: int):
    return conn.execute(
        "SELECT id, name, phone, address FROM owner WHERE id=?", (owner_id,)
    ).fetchone()


def list_all(conn: Connection):
    return conn.execute("SELECT id, name, phone, address FROM owner ORDER BY id").fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM owner").fetchone()["c"])


def phone_by_pet_name(conn: Connection, pet_name: str) -> Optional[str]:
    # several pets may share a name: the earliest inserted pet wins
    row = conn.execute(
        "SELECT o.phone FROM pet p JOIN owner o ON o.id = p.owner_id "
        "WHERE p.name = ? ORDER BY p.id LIMIT 1",
        (pet_name,),
    ).fetchone()
    return row["phone"] if row else None


def update_phone(conn: Connection, old_phone: str, new_phone: str) -> int:
    cur = conn.execute("UPDATE owner SET phone=? WHERE phone=?", (new_phone, old_phone))
    return int(cur.rowcount)

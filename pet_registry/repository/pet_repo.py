from __future__ import annotations

from sqlite3 import Connection


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS pet (
            id INTEGER PRIMARY KEY,
            owner_id INTEGER NOT NULL REFERENCES owner(id),
            name TEXT NOT NULL,
            species TEXT NOT NULL
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_pet_name ON pet(name)")
    conn.execute("CREATE INDEX IF NOT EXISTS idx_pet_owner ON pet(owner_id)")


def insert_pet(conn: Connection, owner_id: int, name: str, species: str) -> int:
    cur = conn.execute(
        "INSERT INTO pet(owner_id, name, species) VALUES(?, ?, ?)",
        (owner_id, name, species),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, pet_id: int):
    return conn.execute(
        "SELECT id, owner_id, name, species FROM pet WHERE id=?", (pet_id,)
    ).fetchone()


def list_all(conn: Connection):
    return conn.execute("SELECT id, owner_id, name, species FROM pet ORDER BY id").fetchall()


def list_by_owner(conn: Connection, owner_id: int):
    return conn.execute(
        "SELECT id, owner_id, name, species FROM pet WHERE owner_id=? ORDER BY id",
        (owner_id,),
    ).fetchall()


def count_all(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM pet").fetchone()["c"])

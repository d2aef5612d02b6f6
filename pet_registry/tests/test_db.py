import pytest

from pet_registry.db import get_conn, get_db_path, transaction
from pet_registry.errors import StorageError


def test_db_path_env_wins(tmp_path, monkeypatch):
    target = tmp_path / "env" / "registry.db"
    monkeypatch.setenv("PET_DB_PATH", str(target))
    assert get_db_path() == str(target)
    assert target.parent.is_dir()


def test_db_path_from_config_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n", encoding="utf-8")
    monkeypatch.delenv("PET_DB_PATH", raising=False)
    # PYTEST_CURRENT_TEST is set while tests run, so the test path is chosen
    assert get_db_path(str(cfg)) == str(tmp_path / "test.db")

    cfg.write_text(f"db_path: {tmp_path / 'prod.db'}\n", encoding="utf-8")
    assert get_db_path(str(cfg)) == str(tmp_path / "prod.db")


def test_statement_errors_become_storage_errors(tmp_db_path):
    with pytest.raises(StorageError):
        with get_conn(tmp_db_path) as conn:
            conn.execute("SELECT * FROM no_such_table")


def test_unopenable_database(tmp_path):
    with pytest.raises(StorageError):
        with get_conn(str(tmp_path / "missing" / "dir" / "x.db")) as conn:
            conn.execute("SELECT 1")


def test_transaction_rolls_back(tmp_db_path):
    with get_conn(tmp_db_path) as conn:
        with pytest.raises(RuntimeError):
            with transaction(conn):
                conn.execute("INSERT INTO owner(name, phone, address) VALUES('A','1','x')")
                raise RuntimeError("boom")
        assert conn.execute("SELECT COUNT(1) AS c FROM owner").fetchone()["c"] == 0


def test_foreign_keys_enforced(tmp_db_path):
    # the store rejects dangling owner references too; the error surfaces as StorageError
    with pytest.raises(StorageError):
        with get_conn(tmp_db_path) as conn:
            conn.execute("INSERT INTO pet(owner_id, name, species) VALUES(99, 'Rex', 'Koira')")


@pytest.mark.parametrize("content", ["- db_path\n", "just a string\n", "42\n"])
def test_db_path_ignores_non_mapping_config(tmp_path, monkeypatch, content):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(content, encoding="utf-8")
    target = tmp_path / "env.db"
    monkeypatch.setenv("PET_DB_PATH", str(target))
    assert get_db_path(str(cfg)) == str(target)

    monkeypatch.delenv("PET_DB_PATH")
    assert get_db_path(str(cfg)).endswith("Data.db")

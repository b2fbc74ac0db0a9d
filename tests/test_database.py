"""
Tests for the Database pool handle, schema bootstrap and configuration.
"""

import importlib
import re
from unittest.mock import MagicMock

import psycopg2
import pytest

import config
from db import connection
from db.connection import Database
from db.init_db import INDEXES, TABLES, create_tables


class TestDatabase:

    def test_get_connection_before_init(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            Database(dsn="postgresql://x").get_connection()

    def test_pool_lifecycle(self, monkeypatch):
        pool_cls = MagicMock()
        monkeypatch.setattr(connection.pool, "SimpleConnectionPool", pool_cls)
        db = Database(dsn="postgresql://u:p@h:5432/d", min_conn=2, max_conn=4)

        db.init_pool()
        db.init_pool()
        assert db.is_open
        pool_cls.assert_called_once_with(2, 4, "postgresql://u:p@h:5432/d")

        conn = db.get_connection()
        db.release_connection(conn)
        pool_cls.return_value.putconn.assert_called_once_with(conn)

        db.close_pool()
        assert not db.is_open
        pool_cls.return_value.closeall.assert_called_once()

    def test_context_manager(self, monkeypatch):
        pool_cls = MagicMock()
        monkeypatch.setattr(connection.pool, "SimpleConnectionPool", pool_cls)

        with Database(dsn="postgresql://x") as db:
            assert db.is_open
        assert not db.is_open

    def test_init_pool_unreachable(self, monkeypatch):
        pool_cls = MagicMock(side_effect=psycopg2.OperationalError("connection refused"))
        monkeypatch.setattr(connection.pool, "SimpleConnectionPool", pool_cls)
        db = Database(dsn="postgresql://x")

        with pytest.raises(psycopg2.OperationalError):
            db.init_pool()
        assert not db.is_open

    def test_dict_cursor_uses_real_dict_cursor(self, conn):
        cur = Database.dict_cursor(conn)
        assert cur.cursor_factory is psycopg2.extras.RealDictCursor


class TestCreateTables:

    def test_creates_tables_then_indexes(self, db, conn):
        created = create_tables(db)

        assert created == ["users", "properties", "reservations", "property_reviews"]
        statements = [sql for sql, _ in conn.executed]
        assert len(statements) == len(TABLES) + len(INDEXES)
        for name, sql in zip(created, statements):
            assert f"CREATE TABLE IF NOT EXISTS {name} (" in sql
        assert all(sql.startswith("CREATE INDEX") for sql in statements[len(TABLES):])
        assert conn.commits == 1

    def test_referenced_tables_come_first(self):
        order = [name for name, _ in TABLES]
        for i, (_, ddl) in enumerate(TABLES):
            for referenced in re.findall(r"REFERENCES (\w+)\(", ddl):
                assert order.index(referenced) < i

    def test_failure_rolls_back(self, db, conn):
        conn.error = psycopg2.ProgrammingError("permission denied")

        with pytest.raises(psycopg2.ProgrammingError):
            create_tables(db)
        assert conn.rollbacks == 1
        assert conn.commits == 0


class TestConfig:

    def test_database_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "6543")
        monkeypatch.setenv("DB_NAME", "lightbnb_test")
        monkeypatch.setenv("DB_USER", "tester")
        monkeypatch.setenv("DB_PASS", "pw")
        try:
            reloaded = importlib.reload(config)
            assert reloaded.DATABASE_URL == "postgresql://tester:pw@db.internal:6543/lightbnb_test"
        finally:
            monkeypatch.undo()
            importlib.reload(config)

    def test_defaults(self):
        assert config.DEFAULT_RESULT_LIMIT == 10
        assert config.DB_POOL_MIN <= config.DB_POOL_MAX

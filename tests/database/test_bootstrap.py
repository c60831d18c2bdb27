from __future__ import annotations

from src.user_directory.user_directory.database.bootstrap import (
    DEFAULT_SCHEMA_PATH,
    _strip_create_db_and_use,
    iter_sql_statements,
)


def test_iter_sql_statements_splits_outside_quotes_and_comments():
    sql = """
    -- leading comment; not a statement
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES ('x;y'); -- trailing; comment
    INSERT INTO a VALUES ("it's");
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES ('x;y')",
        'INSERT INTO a VALUES ("it\'s")',
        "SELECT 1",
    ]


def test_iter_sql_statements_keeps_escaped_quotes():
    statements = list(iter_sql_statements(r"INSERT INTO a VALUES ('a\';b'); SELECT 2;"))

    assert statements == [r"INSERT INTO a VALUES ('a\';b')", "SELECT 2"]


def test_schema_file_defines_users_table():
    sql = _strip_create_db_and_use(DEFAULT_SCHEMA_PATH.read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    users = next(s for s in statements if "CREATE TABLE IF NOT EXISTS users" in s)
    assert "uq_users_username" in users
    assert "uq_users_email" in users
    assert "password_hash" in users

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional

from werkzeug.security import generate_password_hash

from .connection import DBConfig, DatabaseConnection

# (username, email, password, first_name, last_name, role, crm, job_applications)
DEMO_USERS = (
    ("admin", "admin@q361.local", "admin123", "System", "Administrator", "hr_admin", 0, 0),
    ("hr.manager", "hr@q361.local", "hr12345", "Hana", "Rahman", "hr_admin", 0, 0),
    ("jdoe", "jdoe@q361.local", "employee123", "John", "Doe", "employee", 1, 0),
    ("logistics", "logistics@q361.local", "logistics123", "Lina", "Haddad", "logistics_manager", 0, 0),
    ("studio", "studio@q361.local", "studio123", "Sami", "Nour", "content_creator", 0, 1),
)


def _connection(db_config: dict) -> DatabaseConnection:
    # Bootstrap talks to the server before the app container exists.
    return DatabaseConnection(DBConfig.from_dict(db_config))


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql independent of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on `;`, ignoring semicolons inside quoted strings and `--` comments."""
    start = 0
    quote: Optional[str] = None
    i = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == "-" and sql.startswith("--", i):
            end = sql.find("\n", i)
            i = n if end == -1 else end
            continue
        elif ch == ";":
            stmt = _strip_comments(sql[start:i])
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = _strip_comments(sql[start:])
    if tail:
        yield tail


def _strip_comments(chunk: str) -> str:
    lines = [ln for ln in chunk.splitlines() if not ln.strip().startswith("--")]
    return "\n".join(lines).strip()


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    with _connection(db_config).cursor(dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    conn = _connection(db_config)
    with conn.cursor(dictionary=False, with_database=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo accounts with known passwords."""
    with _connection(db_config).cursor() as (_, cur):
        for username, email, password, first, last, role, crm, jobs in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET email=%s, password_hash=%s, first_name=%s, last_name=%s, role=%s,
                        status='active', has_crm_access=%s, has_job_applications_access=%s
                    WHERE username=%s
                    """,
                    (email, password_hash, first, last, role, crm, jobs, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (username, email, password_hash, first_name, last_name, role,
                                       status, has_crm_access, has_job_applications_access)
                    VALUES (%s, %s, %s, %s, %s, %s, 'active', %s, %s)
                    """,
                    (username, email, password_hash, first, last, role, crm, jobs),
                )


def list_tables(db_config: dict) -> list[str]:
    with _connection(db_config).cursor(dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Sequence
from urllib.parse import urlparse

from glam_store.schema import get_schema_sql


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


def detect_dialect(dsn: str) -> str:
    """Return 'postgres' or 'sqlite'."""
    s = (dsn or "").strip()
    if not s:
        return "sqlite"
    try:
        scheme = urlparse(s).scheme.lower()
    except Exception:
        scheme = ""
    if scheme in ("postgres", "postgresql"):
        return "postgres"
    # Allow sqlite:///path style, but default is file path.
    return "sqlite"


def _qmark_to_pct(sql: str) -> str:
    """Convert SQLite qmark placeholders (?) to psycopg2 placeholders (%s).

    Skips '?' inside single/double-quoted string literals. Not a full SQL parser,
    but sufficient for the statements in this codebase.
    """
    out: List[str] = []
    in_single = False
    in_double = False
    for ch in sql:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "?" and not in_single and not in_double:
            out.append("%s")
            continue
        out.append(ch)
    return "".join(out)


class PGCursor:
    def __init__(self, cur: Any):
        self._cur = cur

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> "PGCursor":
        self._cur.execute(_qmark_to_pct(sql), tuple(params or ()))
        return self

    def fetchone(self) -> Any:
        return self._cur.fetchone()

    def fetchall(self) -> Any:
        return self._cur.fetchall()

    @property
    def rowcount(self) -> int:
        try:
            return int(self._cur.rowcount or 0)
        except Exception:
            return 0

    def close(self) -> None:
        self._cur.close()


class PGConnection:
    """A tiny adapter that makes psycopg2 connections look like sqlite3 connections."""

    dialect = "postgres"

    def __init__(self, conn: Any):
        self._conn = conn

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> PGCursor:
        wrapper = PGCursor(self._conn.cursor())
        wrapper.execute(sql, params)
        return wrapper

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()


def is_unique_violation(exc: BaseException) -> bool:
    """True for UNIQUE/PRIMARY KEY violations on either engine."""
    if isinstance(exc, sqlite3.IntegrityError):
        return "UNIQUE" in str(exc).upper()
    # psycopg2 exposes the SQLSTATE as .pgcode (23505 = unique_violation)
    return getattr(exc, "pgcode", None) == "23505"


@contextmanager
def connect(db_dsn: str) -> Iterator[Any]:
    """Connect to SQLite or Postgres with sensible defaults.

    - SQLite: uses WAL + NORMAL sync.
    - Postgres: uses psycopg2 (RealDictCursor) so rows behave like dicts.

    Commits on success, rolls back when the block raises.
    """
    dsn = (db_dsn or "").strip()
    dialect = detect_dialect(dsn)

    if dialect == "postgres":
        try:
            import psycopg2
            import psycopg2.extras
        except Exception as e:
            raise RuntimeError(
                "Postgres selected but psycopg2 is not installed. "
                "Install psycopg2-binary and try again."
            ) from e

        raw = psycopg2.connect(dsn, cursor_factory=psycopg2.extras.RealDictCursor)
        conn = PGConnection(raw)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        return

    if dsn.lower().startswith("sqlite:///"):
        dsn = dsn[len("sqlite:///") :]

    Path(dsn).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(dsn, timeout=30, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA busy_timeout=5000;")  # 5s
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_dsn: str) -> None:
    """Create all tables and indexes (idempotent)."""
    dialect = detect_dialect(db_dsn)
    _debug(f"Initializing DB ({dialect}) at {db_dsn}")
    with connect(db_dsn) as conn:
        ddl = get_schema_sql(dialect)
        if dialect == "postgres":
            # Naive split is OK for our schema (no ';' inside literals or comments)
            for stmt in [s.strip() for s in ddl.split(";") if s.strip()]:
                conn.execute(stmt)
            return
        conn.executescript(ddl)

"""Relational schema for the Glam Store.

Timestamps are ISO-8601 TEXT (UTC, with 'Z') so they sort lexicographically in
time order on both engines; `ORDER BY created_at DESC` is the newest-first listing.

NOTE: The Postgres schema is generated from the SQLite schema with a small set of
transformations (types + autoincrement).
"""

from __future__ import annotations

import re


SCHEMA_SQLITE = r"""
PRAGMA foreign_keys = ON;

-- Users / Auth
-- Email is the identity. The hash is self-describing (algorithm + salt + digest).
CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    is_admin INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_users_created ON users (created_at);

-- Catalog
-- id is the public slug id (name slug + '-' + epoch millis).
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    price REAL NOT NULL DEFAULT 0,
    description TEXT NOT NULL DEFAULT '',
    image_url TEXT NOT NULL DEFAULT '',
    video_id TEXT NOT NULL DEFAULT '',
    stock INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 0
);
CREATE INDEX IF NOT EXISTS idx_products_name ON products (name);
CREATE INDEX IF NOT EXISTS idx_products_active_stock ON products (is_active, stock);
"""


def _sqlite_to_postgres(ddl: str) -> str:
    # Remove SQLite pragmas
    lines: list[str] = []
    for line in ddl.splitlines():
        if line.strip().upper().startswith("PRAGMA "):
            continue
        lines.append(line)
    out = "\n".join(lines)

    # Types
    out = re.sub(r"\bREAL\b", "DOUBLE PRECISION", out)

    # AUTOINCREMENT primary keys
    out = re.sub(
        r"INTEGER\s+PRIMARY\s+KEY\s+AUTOINCREMENT",
        "BIGSERIAL PRIMARY KEY",
        out,
        flags=re.IGNORECASE,
    )
    out = re.sub(r"\bAUTOINCREMENT\b", "", out, flags=re.IGNORECASE)

    return out


SCHEMA_POSTGRES = _sqlite_to_postgres(SCHEMA_SQLITE)


def get_schema_sql(dialect: str) -> str:
    d = (dialect or "").lower()
    if d.startswith("post"):
        return SCHEMA_POSTGRES
    return SCHEMA_SQLITE

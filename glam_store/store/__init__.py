"""Credential + catalog storage.

`build_stores(cfg)` picks the adapter pair named by `Config.STORE_BACKEND`:

- `sql`: SQLite file or Postgres URL in `Config.DB_DSN`
- `mongo`: MongoDB at `Config.MONGO_URI`, database `Config.MONGO_DB_NAME`
"""

from __future__ import annotations

from typing import Tuple

from glam_store.config import Config

from .base import Product, ProductFields, ProductStore, User, UserStore, normalize_email
from .sql import SqlProductStore, SqlUserStore


def build_stores(cfg: Config) -> Tuple[UserStore, ProductStore]:
    backend = (cfg.STORE_BACKEND or "sql").strip().lower()
    if backend == "sql":
        return SqlUserStore(cfg.DB_DSN), SqlProductStore(cfg.DB_DSN)
    if backend == "mongo":
        from pymongo import MongoClient

        from .mongo import MongoProductStore, MongoUserStore

        db = MongoClient(cfg.MONGO_URI)[cfg.MONGO_DB_NAME]
        return MongoUserStore(db), MongoProductStore(db)
    raise ValueError(f"unknown STORE_BACKEND: {cfg.STORE_BACKEND}")


__all__ = [
    "Product",
    "ProductFields",
    "ProductStore",
    "User",
    "UserStore",
    "build_stores",
    "normalize_email",
]

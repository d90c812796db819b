from __future__ import annotations

from typing import Any, List, Optional, Tuple

from glam_store.db import connect, init_db, is_unique_violation
from glam_store.errors import ConflictError
from glam_store.util.time import utcnow_iso

from .base import Product, ProductFields, ProductStore, User, UserStore, normalize_email


_USER_PUBLIC_COLS = "user_id, email, name, is_admin, created_at"
_PRODUCT_COLS = "id, name, price, description, image_url, video_id, stock, is_active"


def _row_to_user(row: Any) -> User:
    d = dict(row)
    return User(
        user_id=str(d["user_id"]),
        email=str(d["email"]),
        name=str(d["name"]),
        is_admin=bool(int(d.get("is_admin") or 0)),
        created_at=str(d["created_at"]),
        password_hash=d.get("password_hash"),
    )


def _row_to_product(row: Any) -> Product:
    d = dict(row)
    return Product(
        id=str(d["id"]),
        name=str(d["name"]),
        price=float(d["price"] or 0),
        description=str(d["description"] or ""),
        image_url=str(d["image_url"] or ""),
        video_id=str(d["video_id"] or ""),
        stock=int(d["stock"] or 0),
        is_active=bool(int(d["is_active"] or 0)),
    )


class SqlUserStore(UserStore):
    """Users table on SQLite or Postgres."""

    def __init__(self, db_dsn: str):
        self.db_dsn = db_dsn

    def init_schema(self) -> None:
        init_db(self.db_dsn)

    def create_user(self, email: str, name: str, password_hash: str) -> str:
        e = normalize_email(email)
        with connect(self.db_dsn) as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO users (email, name, password_hash, is_admin, created_at)
                    VALUES (?,?,?,0,?)
                    """,
                    (e, name, password_hash, utcnow_iso()),
                )
            except Exception as exc:
                if is_unique_violation(exc):
                    raise ConflictError("User already exists") from exc
                raise
            row = conn.execute("SELECT user_id FROM users WHERE email=?", (e,)).fetchone()
        if row is None:
            raise RuntimeError(f"user_insert_missing: {e}")
        return str(row["user_id"])

    def find_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        e = normalize_email(email)
        if not e:
            return None
        cols = _USER_PUBLIC_COLS + (", password_hash" if include_password else "")
        with connect(self.db_dsn) as conn:
            row = conn.execute(f"SELECT {cols} FROM users WHERE email=?", (e,)).fetchone()
        return _row_to_user(row) if row is not None else None

    def list_users(self) -> List[User]:
        with connect(self.db_dsn) as conn:
            rows = conn.execute(
                f"SELECT {_USER_PUBLIC_COLS} FROM users ORDER BY created_at DESC, user_id DESC"
            ).fetchall()
        return [_row_to_user(r) for r in rows]

    def upsert_admin(self, email: str, name: str, password_hash: str) -> Tuple[str, bool]:
        e = normalize_email(email)
        with connect(self.db_dsn) as conn:
            existing = conn.execute("SELECT user_id FROM users WHERE email=?", (e,)).fetchone()
            if existing is not None:
                conn.execute(
                    "UPDATE users SET name=?, password_hash=?, is_admin=1 WHERE email=?",
                    (name, password_hash, e),
                )
                return str(existing["user_id"]), False

            conn.execute(
                """
                INSERT INTO users (email, name, password_hash, is_admin, created_at)
                VALUES (?,?,?,1,?)
                """,
                (e, name, password_hash, utcnow_iso()),
            )
            row = conn.execute("SELECT user_id FROM users WHERE email=?", (e,)).fetchone()
        if row is None:
            raise RuntimeError(f"user_insert_missing: {e}")
        return str(row["user_id"]), True

    def count_users(self) -> int:
        with connect(self.db_dsn) as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()
        return int(row["n"])


class SqlProductStore(ProductStore):
    """Products table on SQLite or Postgres."""

    def __init__(self, db_dsn: str):
        self.db_dsn = db_dsn

    def init_schema(self) -> None:
        init_db(self.db_dsn)

    def list_products(self, include_inactive: bool = False) -> List[Product]:
        sql = f"SELECT {_PRODUCT_COLS} FROM products"
        if not include_inactive:
            sql += " WHERE is_active=1 AND stock > 0"
        sql += " ORDER BY name ASC"
        with connect(self.db_dsn) as conn:
            rows = conn.execute(sql).fetchall()
        return [_row_to_product(r) for r in rows]

    def get_product(self, product_id: str) -> Optional[Product]:
        with connect(self.db_dsn) as conn:
            row = conn.execute(
                f"SELECT {_PRODUCT_COLS} FROM products WHERE id=?",
                (product_id,),
            ).fetchone()
        return _row_to_product(row) if row is not None else None

    def insert_product(self, product: Product) -> None:
        with connect(self.db_dsn) as conn:
            try:
                conn.execute(
                    f"INSERT INTO products ({_PRODUCT_COLS}) VALUES (?,?,?,?,?,?,?,?)",
                    (
                        product.id,
                        product.name,
                        float(product.price),
                        product.description,
                        product.image_url,
                        product.video_id,
                        int(product.stock),
                        1 if product.is_active else 0,
                    ),
                )
            except Exception as exc:
                if is_unique_violation(exc):
                    raise ConflictError("Generated product id already exists") from exc
                raise

    def replace_product(self, product_id: str, fields: ProductFields) -> bool:
        with connect(self.db_dsn) as conn:
            cur = conn.execute(
                """
                UPDATE products
                SET name=COALESCE(?, name), price=?, description=?, image_url=?,
                    video_id=?, stock=?, is_active=?
                WHERE id=?
                """,
                (
                    fields.name,
                    float(fields.price),
                    fields.description,
                    fields.image_url,
                    fields.video_id,
                    int(fields.stock),
                    1 if fields.is_active else 0,
                    product_id,
                ),
            )
            return cur.rowcount > 0

    def delete_product(self, product_id: str) -> bool:
        with connect(self.db_dsn) as conn:
            cur = conn.execute("DELETE FROM products WHERE id=?", (product_id,))
            return cur.rowcount > 0

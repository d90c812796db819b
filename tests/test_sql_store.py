"""
Tests for the SQL (SQLite) store adapters
"""

from contextlib import nullcontext
from unittest.mock import MagicMock

import pytest

from glam_store.auth.security import hash_password, verify_password
from glam_store.db import connect
from glam_store.errors import ConflictError
from glam_store.store.base import Product, ProductFields


def _product(pid, name, *, stock=1, is_active=True, price=10.0):
    return Product(
        id=pid,
        name=name,
        price=price,
        description="d",
        image_url="img.png",
        video_id="vid",
        stock=stock,
        is_active=is_active,
    )


class TestSqlUserStore:
    def test_create_and_find(self, user_store):
        uid = user_store.create_user("A@A.com ", "A", hash_password("abcd"))

        u = user_store.find_by_email("a@a.com")
        assert u is not None
        assert u.user_id == uid
        assert u.email == "a@a.com"
        assert u.is_admin is False
        assert u.created_at.endswith("Z")
        # hash only on request
        assert u.password_hash is None

        with_pw = user_store.find_by_email("a@a.com", include_password=True)
        assert verify_password("abcd", with_pw.password_hash)

    def test_duplicate_email_is_conflict(self, user_store):
        user_store.create_user("a@a.com", "A", hash_password("abcd"))
        with pytest.raises(ConflictError):
            user_store.create_user("a@a.com", "Other", hash_password("zzzz"))

    def test_find_unknown(self, user_store):
        assert user_store.find_by_email("nobody@a.com") is None
        assert user_store.find_by_email("") is None

    def test_list_users_newest_first_without_hash(self, user_store):
        first = user_store.create_user("first@a.com", "First", hash_password("abcd"))
        second = user_store.create_user("second@a.com", "Second", hash_password("abcd"))

        rows = user_store.list_users()
        assert [u.user_id for u in rows] == [second, first]
        assert all(u.password_hash is None for u in rows)
        assert set(rows[0].public()) == {"user_id", "email", "name", "is_admin", "created_at"}

    def test_upsert_admin_creates(self, user_store):
        uid, created = user_store.upsert_admin("admin@admin.com", "ADMIN", hash_password("admin123"))

        assert created is True
        u = user_store.find_by_email("admin@admin.com")
        assert u.user_id == uid
        assert u.is_admin is True

    def test_upsert_admin_promotes_existing(self, user_store):
        uid = user_store.create_user("a@a.com", "A", hash_password("abcd"))

        got, created = user_store.upsert_admin("a@a.com", "Boss", hash_password("newpass"))

        assert (got, created) == (uid, False)
        u = user_store.find_by_email("a@a.com", include_password=True)
        assert u.is_admin is True
        assert u.name == "Boss"
        assert verify_password("newpass", u.password_hash)
        assert user_store.count_users() == 1

    def test_users_table_columns(self, user_store):
        with connect(user_store.db_dsn) as conn:
            cols = {r["name"] for r in conn.execute("PRAGMA table_info(users)").fetchall()}
        assert cols == {"user_id", "email", "name", "password_hash", "is_admin", "created_at"}

    def test_missing_row_after_insert_raises(self, user_store, monkeypatch):
        conn = MagicMock()
        conn.execute.return_value.fetchone.return_value = None
        monkeypatch.setattr("glam_store.store.sql.connect", lambda dsn: nullcontext(conn))

        with pytest.raises(RuntimeError, match="user_insert_missing"):
            user_store.create_user("a@a.com", "A", "hash")
        with pytest.raises(RuntimeError, match="user_insert_missing"):
            user_store.upsert_admin("boss@a.com", "Boss", "hash")


class TestSqlProductStore:
    def test_listing_filters_inactive_and_out_of_stock(self, product_store):
        product_store.insert_product(_product("b-1", "Blush"))
        product_store.insert_product(_product("a-1", "Alpha", stock=0))
        product_store.insert_product(_product("c-1", "Cream", is_active=False))
        product_store.insert_product(_product("a-2", "Aloe"))

        visible = product_store.list_products()
        assert [p.id for p in visible] == ["a-2", "b-1"]

        everything = product_store.list_products(include_inactive=True)
        assert [p.name for p in everything] == ["Aloe", "Alpha", "Blush", "Cream"]

    def test_get_product_round_trips_fields(self, product_store):
        p = _product("x-1", "Gloss", price=12.5, stock=3)
        product_store.insert_product(p)

        assert product_store.get_product("x-1") == p
        assert product_store.get_product("missing") is None

    def test_duplicate_id_is_conflict(self, product_store):
        product_store.insert_product(_product("x-1", "Gloss"))
        with pytest.raises(ConflictError):
            product_store.insert_product(_product("x-1", "Gloss again"))

    def test_replace_overwrites_every_field(self, product_store):
        product_store.insert_product(_product("x-1", "Gloss", price=12.5, stock=3))

        assert product_store.replace_product("x-1", ProductFields(name="New")) is True

        p = product_store.get_product("x-1")
        assert (p.name, p.price, p.description, p.image_url, p.video_id, p.stock, p.is_active) == (
            "New", 0.0, "", "", "", 0, False,
        )

    def test_replace_without_name_keeps_name(self, product_store):
        product_store.insert_product(_product("x-1", "Gloss"))

        product_store.replace_product("x-1", ProductFields(name=None, price=3))

        p = product_store.get_product("x-1")
        assert p.name == "Gloss"
        assert p.price == 3.0

    def test_replace_and_delete_missing(self, product_store):
        assert product_store.replace_product("missing", ProductFields(name="x")) is False
        assert product_store.delete_product("missing") is False

    def test_delete(self, product_store):
        product_store.insert_product(_product("x-1", "Gloss"))

        assert product_store.delete_product("x-1") is True
        assert product_store.get_product("x-1") is None

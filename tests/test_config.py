"""
Tests for configuration helpers
"""

import pytest

from glam_store.config import Config, _env_bool, _env_list
from glam_store.store import build_stores
from glam_store.store.sql import SqlProductStore, SqlUserStore


class TestEnvHelpers:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("GLAM_FLAG", raw)
        assert _env_bool("GLAM_FLAG") is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_falsy(self, monkeypatch, raw):
        monkeypatch.setenv("GLAM_FLAG", raw)
        assert _env_bool("GLAM_FLAG", True) is False

    def test_unset_or_garbage_uses_default(self, monkeypatch):
        monkeypatch.delenv("GLAM_FLAG", raising=False)
        assert _env_bool("GLAM_FLAG", None) is None
        monkeypatch.setenv("GLAM_FLAG", "maybe")
        assert _env_bool("GLAM_FLAG", False) is False

    def test_env_list(self, monkeypatch):
        monkeypatch.setenv("GLAM_ORIGINS", " http://a.com, ,http://b.com ")
        assert _env_list("GLAM_ORIGINS", "") == ("http://a.com", "http://b.com")


class TestConfig:
    def test_production_flag(self):
        assert Config(APP_ENV="production").is_production is True
        assert Config(APP_ENV="development").is_production is False

    def test_cors_origins_include_frontend(self):
        cfg = Config(CORS_ALLOW_ORIGINS=("http://localhost:3000",), FRONTEND_URL="https://shop.example.com")
        assert cfg.cors_origins == ["http://localhost:3000", "https://shop.example.com"]

        no_front = Config(CORS_ALLOW_ORIGINS=("http://localhost:3000",), FRONTEND_URL=None)
        assert no_front.cors_origins == ["http://localhost:3000"]


class TestBuildStores:
    def test_sql_backend(self, tmp_path):
        users, products = build_stores(Config(STORE_BACKEND="sql", DB_DSN=str(tmp_path / "x.sqlite")))
        assert isinstance(users, SqlUserStore)
        assert isinstance(products, SqlProductStore)

    def test_mongo_backend(self):
        from glam_store.store.mongo import MongoProductStore, MongoUserStore

        # MongoClient connects lazily, so no server is needed here.
        users, products = build_stores(Config(STORE_BACKEND="mongo", MONGO_URI="mongodb://localhost:27017"))
        assert isinstance(users, MongoUserStore)
        assert isinstance(products, MongoProductStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_stores(Config(STORE_BACKEND="mysql"))

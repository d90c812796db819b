import os
from dataclasses import dataclass
from typing import Optional

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.environ.get(name, default)
    return tuple(o.strip() for o in (raw or "").split(",") if o.strip())


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide secrets (Twilio, bootstrap admin) via environment variables
    or a .env file. Do not hardcode secrets in source code.

    The defaults are read when the class body is evaluated, so tests that need
    different values should construct Config(...) with explicit keyword arguments.
    """

    # -----------------
    # Core
    # -----------------
    # "production" switches the session cookie to Secure + SameSite=None.
    APP_ENV: str = os.environ.get("APP_ENV", "development")

    # Storage adapter: "sql" (SQLite / Postgres) or "mongo".
    STORE_BACKEND: str = os.environ.get("STORE_BACKEND", "sql")

    # Preferred: set DATABASE_URL to use Postgres.
    # Fallback: GLAM_DB_PATH for SQLite.
    DB_DSN: str = (
        os.environ.get("GLAM_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
        or os.environ.get("GLAM_DB_PATH", "./glam_store.sqlite")
    )

    # MongoDB
    MONGO_URI: str = os.environ.get("MONGO_URI", "mongodb://localhost:27017/glam_app")
    MONGO_DB_NAME: str = os.environ.get("MONGO_DB_NAME", "glam_app")

    # -----------------
    # Sessions
    # -----------------
    SESSION_COOKIE_NAME: str = os.environ.get("SESSION_COOKIE_NAME", "glam_sid")
    SESSION_TTL_HOURS: int = int(os.environ.get("SESSION_TTL_HOURS", "24"))

    # -----------------
    # CORS
    # -----------------
    # Any http(s)://localhost[:port] or 127.0.0.1 origin is always allowed on top of these.
    CORS_ALLOW_ORIGINS: tuple[str, ...] = _env_list(
        "CORS_ALLOW_ORIGINS",
        "http://localhost:80,http://localhost:3000,http://127.0.0.1:80,http://127.0.0.1:3000",
    )
    # Deployed static frontend (e.g. Vercel). Appended to the allow-list when set.
    FRONTEND_URL: str | None = (os.environ.get("FRONTEND_URL") or "").strip() or None

    # -----------------
    # SMS (Twilio)
    # -----------------
    # TEST_MODE short-circuits SMS sending to a simulated success.
    TEST_MODE: bool = _env_bool("TEST_MODE", False) is True
    TWILIO_ACCOUNT_SID: str | None = os.environ.get("TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN: str | None = os.environ.get("TWILIO_AUTH_TOKEN")
    TWILIO_PHONE_NUMBER: str | None = os.environ.get("TWILIO_PHONE_NUMBER")
    TWILIO_BASE_URL: str = os.environ.get("TWILIO_BASE_URL", "https://api.twilio.com/2010-04-01")

    # -----------------
    # Admin bootstrap
    # -----------------
    # Only used when BOTH email and password are set and the users table is empty.
    BOOTSTRAP_ADMIN_EMAIL: str | None = (os.environ.get("BOOTSTRAP_ADMIN_EMAIL") or "").strip() or None
    BOOTSTRAP_ADMIN_PASSWORD: str | None = os.environ.get("BOOTSTRAP_ADMIN_PASSWORD") or None
    BOOTSTRAP_ADMIN_NAME: str = os.environ.get("BOOTSTRAP_ADMIN_NAME", "ADMIN")

    @property
    def is_production(self) -> bool:
        return (self.APP_ENV or "").strip().lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        origins = list(self.CORS_ALLOW_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


def load_config() -> Config:
    return Config()

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from glam_store.config import Config
from glam_store.errors import Unauthorized, ValidationError
from glam_store.store.base import User, UserStore, normalize_email

from .security import dummy_verify, hash_password, verify_password


INVALID_CREDENTIALS = "Invalid credentials"


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


def register_user(users: UserStore, *, name: str | None, email: str | None, password: str | None) -> Dict[str, Any]:
    """Create a regular (non-admin) account. Does not log the user in."""
    n = (name or "").strip()
    e = normalize_email(email)
    if not n or not e or not password:
        raise ValidationError("Missing fields")

    user_id = users.create_user(e, n, hash_password(password))
    _debug(f"registered user_id={user_id} email={e}")
    return {"id": user_id, "name": n, "email": e}


def authenticate(users: UserStore, *, email: str | None, password: str | None) -> User:
    """Return the user for valid credentials.

    Unknown email and wrong password raise the same Unauthorized message.
    """
    e = normalize_email(email)
    if not e or not password:
        raise ValidationError("Missing fields")

    user = users.find_by_email(e, include_password=True)
    if user is None:
        dummy_verify()
        _debug(f"login failed (unknown email) email={e}")
        raise Unauthorized(INVALID_CREDENTIALS)

    if not verify_password(password, str(user.password_hash or "")):
        _debug(f"login failed (bad password) email={e}")
        raise Unauthorized(INVALID_CREDENTIALS)

    user.password_hash = None
    return user


def provision_admin(users: UserStore, *, email: str, password: str, name: str = "ADMIN") -> Tuple[str, bool]:
    """Create the user as admin, or promote + reset the password of an existing one."""
    e = normalize_email(email)
    if not e:
        raise ValueError("email_blank")
    return users.upsert_admin(e, (name or "ADMIN").strip(), hash_password(password))


def bootstrap_admin_if_needed(cfg: Config, users: UserStore) -> Optional[Dict[str, Any]]:
    """Create the first admin user if the users table is empty.

    Controlled via environment variables:

    - BOOTSTRAP_ADMIN_EMAIL
    - BOOTSTRAP_ADMIN_PASSWORD
    - BOOTSTRAP_ADMIN_NAME (default: ADMIN)

    Does nothing unless both email and password are set.
    """

    email = cfg.BOOTSTRAP_ADMIN_EMAIL
    password = cfg.BOOTSTRAP_ADMIN_PASSWORD
    if not email or not password:
        return None
    if users.count_users() > 0:
        return None

    user_id, _ = provision_admin(users, email=email, password=password, name=cfg.BOOTSTRAP_ADMIN_NAME)
    return {"id": user_id, "email": normalize_email(email), "is_admin": True}

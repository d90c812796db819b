from __future__ import annotations

from passlib.context import CryptContext


# pbkdf2_sha256 hashes are self-describing: "$pbkdf2-sha256$<rounds>$<salt>$<digest>"
_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    A wrong password is False. A stored hash passlib can't identify raises
    ValueError: that's corrupt data, not a user error.
    """
    if not password_hash:
        raise ValueError("password_hash_blank")
    if not password:
        return False
    return _pwd.verify(password, password_hash)


def dummy_verify() -> None:
    """Spend the same time as a real verify (used when the email is unknown)."""
    _pwd.dummy_verify()

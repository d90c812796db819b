from __future__ import annotations

import re

from glam_store.util.time import epoch_millis


SLUG_MAX_LEN = 30


def slugify(name: str | None) -> str:
    """Lowercase, whitespace runs -> '-', drop anything outside [a-z0-9-].

    Blank names fall back to 'prod'. The result is truncated to 30 characters.
    """
    raw = str(name or "prod").lower()
    raw = re.sub(r"\s+", "-", raw)
    raw = re.sub(r"[^a-z0-9\-]", "", raw)
    return raw[:SLUG_MAX_LEN]


def make_product_id(name: str | None, now_ms: int | None = None) -> str:
    # Timestamp suffix only reduces collisions; the store still enforces uniqueness.
    ts = epoch_millis() if now_ms is None else int(now_ms)
    return f"{slugify(name)}-{ts}"

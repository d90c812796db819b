from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request, Response

from glam_store.config import Config
from glam_store.errors import Forbidden, Unauthorized

from .sessions import Session, SessionStore


def _cfg(request: Request) -> Config:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise RuntimeError("server_config_missing")
    return cfg


def _sessions(request: Request) -> SessionStore:
    store = getattr(request.app.state, "sessions", None)
    if store is None:
        raise RuntimeError("session_store_missing")
    return store


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(_cfg(request).SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, *, token: str, cfg: Config) -> None:
    """HTTP-only session cookie. Production: Secure + SameSite=None (cross-site frontend)."""
    prod = cfg.is_production
    response.set_cookie(
        key=cfg.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=prod,
        samesite="none" if prod else "lax",
        max_age=int(cfg.SESSION_TTL_HOURS) * 3600,
        path="/",
    )


def clear_session_cookie(response: Response, cfg: Config) -> None:
    prod = cfg.is_production
    response.delete_cookie(
        key=cfg.SESSION_COOKIE_NAME,
        path="/",
        secure=prod,
        httponly=True,
        samesite="none" if prod else "lax",
    )


def current_session(request: Request) -> Optional[Session]:
    """Session for this request, or None. Never touches the user store."""
    return _sessions(request).get(session_token(request))


def require_auth(request: Request, response: Response) -> Session:
    session = current_session(request)
    if session is None:
        raise Unauthorized()
    # Sliding expiry: re-issue the cookie with a fresh max-age.
    set_session_cookie(response, token=session.token, cfg=_cfg(request))
    return session


def require_admin(session: Session = Depends(require_auth)) -> Session:
    # Uses the flag cached at login; promotion takes effect on next login.
    if not session.cached_is_admin:
        raise Forbidden()
    return session

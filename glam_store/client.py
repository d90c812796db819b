"""HTTP client for the Glam Store API.

Mirrors what the storefront pages do: register, log in, keep the logged-in user
around, and decide where to send the user after login.

Usage:

    client = StoreClient("http://localhost:3000")
    user = client.login("a@a.com", "abcd")
    target = resolve_redirect(user, redirect_param=None)
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import unquote

import requests


ADMIN_PAGE = "./admin.html"
HOME_PAGE = "../index.html"
MIN_PASSWORD_LEN = 4


class ClientError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def resolve_redirect(
    user: Dict[str, Any],
    redirect_param: str | None = None,
    *,
    admin_page: str = ADMIN_PAGE,
    home_page: str = HOME_PAGE,
) -> str:
    """Where to go after a successful login.

    Priority: server-provided `redirect`, then the page's `redirect` query
    parameter, then the admin page for admins, else the home page.
    """
    if user.get("redirect"):
        return str(user["redirect"])
    if redirect_param:
        return unquote(redirect_param)
    if user.get("is_admin"):
        return admin_page
    return home_page


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", http: Any = None, timeout: float = 30):
        self.base_url = (base_url or "").rstrip("/")
        # Anything with requests.Session's get/post API (cookies must persist between calls).
        self.http = http or requests.Session()
        self.timeout = timeout
        self.current_user: Optional[Dict[str, Any]] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _call(self, method: str, path: str, payload: Dict[str, Any] | None = None) -> Any:
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload
        r = getattr(self.http, method)(self._url(path), **kwargs)
        if r.status_code >= 400:
            raise ClientError(_error_message(r), status_code=r.status_code)
        return r.json()

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or len(password or "") < MIN_PASSWORD_LEN:
            raise ClientError(
                f"Fill in every field. The password needs at least {MIN_PASSWORD_LEN} characters."
            )
        try:
            return self._call("post", "/api/register", {"name": name, "email": email, "password": password})
        except ClientError as e:
            if e.status_code == 409:
                raise ClientError("An account with that email already exists.", status_code=409) from e
            raise

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self._call("post", "/api/login", {"email": (email or "").strip(), "password": password})
        self.current_user = {
            "name": user.get("name"),
            "email": user.get("email"),
            "is_admin": bool(user.get("is_admin")),
        }
        return user

    def me(self) -> Optional[Dict[str, Any]]:
        """Server-side identity, or None when there is no session."""
        try:
            return self._call("get", "/api/me")
        except ClientError as e:
            if e.status_code == 401:
                return None
            raise

    def logout(self) -> None:
        self._call("post", "/api/logout")
        self.current_user = None


def _error_message(r: Any) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Server error ({r.status_code})"

"""Authentication / authorization helpers.

Auth is kept lightweight:

- Users (email + password hash + admin flag) live in the configured user store
- Server-side sessions live in memory, keyed by an opaque httpOnly cookie

A session caches the user's name and admin flag at login time; an admin
promotion is only visible after the user logs in again.
"""

from .crud import authenticate, bootstrap_admin_if_needed, provision_admin, register_user
from .deps import current_session, require_admin, require_auth
from .sessions import Session, SessionStore

__all__ = [
    "authenticate",
    "bootstrap_admin_if_needed",
    "current_session",
    "provision_admin",
    "register_user",
    "require_admin",
    "require_auth",
    "Session",
    "SessionStore",
]

"""Error taxonomy shared by the stores and the API layer.

Stores and services raise these; `glam_store.api.server` maps each one to its
HTTP status and renders `{"message": ...}`.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for domain errors that carry an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StoreError):
    status_code = 400
    default_message = "Missing fields"


class Unauthorized(StoreError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(StoreError):
    status_code = 403
    default_message = "Admin access required"


class NotFound(StoreError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StoreError):
    status_code = 409
    default_message = "Already exists"

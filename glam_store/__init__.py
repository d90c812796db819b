"""Glam Store - Backend.

Small e-commerce backend: product catalog + user accounts.

Core concepts:
- Users authenticate with email/password and get a server-side session cookie.
- Storage is pluggable: SQL (SQLite/Postgres) or MongoDB, chosen by config.
- Product mutations require a session; listing/detail are public.

See README for setup and usage.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"

"""Create (or promote) an admin user in the configured store.

Usage:
  python scripts/create_admin.py [email] [password] [name]

Defaults: admin@admin.com / admin123 / ADMIN. If the email already exists, its
name and password are reset and it is flagged as admin. Sessions already issued
to that user keep their old role until the user logs in again.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from glam_store.auth.crud import provision_admin
from glam_store.config import load_config
from glam_store.store import build_stores


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("email", nargs="?", default="admin@admin.com")
    ap.add_argument("password", nargs="?", default="admin123")
    ap.add_argument("name", nargs="?", default="ADMIN")
    args = ap.parse_args()

    cfg = load_config()
    users, _ = build_stores(cfg)
    users.init_schema()

    try:
        user_id, created = provision_admin(users, email=args.email, password=args.password, name=args.name)
    except Exception as e:
        print(f"Error creating admin: {e}")
        sys.exit(1)

    if created:
        print(f"Admin user created: {args.email} (id={user_id})")
    else:
        print(f"Existing user promoted to admin: {args.email} (id={user_id})")


if __name__ == "__main__":
    main()

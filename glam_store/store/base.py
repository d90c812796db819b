"""Storage contracts.

Two adapters implement these: `sql` (SQLite / Postgres through `glam_store.db`)
and `mongo` (pymongo). They are alternatives selected by `Config.STORE_BACKEND`,
never used together.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


@dataclass
class User:
    user_id: str
    email: str
    name: str
    is_admin: bool
    created_at: str
    # Only populated by find_by_email(..., include_password=True)
    password_hash: Optional[str] = None

    def public(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "is_admin": self.is_admin,
            "created_at": self.created_at,
        }


@dataclass
class ProductFields:
    """Writable product fields after defaulting.

    `name` is None only on updates that did not supply it (the stored name is kept).
    """

    name: Optional[str]
    price: float = 0
    description: str = ""
    image_url: str = ""
    video_id: str = ""
    stock: int = 0
    is_active: bool = False


@dataclass
class Product:
    id: str
    name: str
    price: float
    description: str
    image_url: str
    video_id: str
    stock: int
    is_active: bool

    @classmethod
    def from_fields(cls, product_id: str, fields: ProductFields) -> "Product":
        return cls(id=product_id, **{**asdict(fields), "name": fields.name or ""})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UserStore(ABC):
    @abstractmethod
    def init_schema(self) -> None:
        ...

    @abstractmethod
    def create_user(self, email: str, name: str, password_hash: str) -> str:
        """Insert a non-admin user and return its id. Raises ConflictError if the email exists."""

    @abstractmethod
    def find_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        ...

    @abstractmethod
    def list_users(self) -> List[User]:
        """All users, newest first, without password hashes."""

    @abstractmethod
    def upsert_admin(self, email: str, name: str, password_hash: str) -> Tuple[str, bool]:
        """Create or promote an admin. Returns (user_id, created)."""

    @abstractmethod
    def count_users(self) -> int:
        ...


class ProductStore(ABC):
    @abstractmethod
    def init_schema(self) -> None:
        ...

    @abstractmethod
    def list_products(self, include_inactive: bool = False) -> List[Product]:
        """Products ordered by name. Without include_inactive only active, in-stock items."""

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def insert_product(self, product: Product) -> None:
        """Raises ConflictError if the id is taken."""

    @abstractmethod
    def replace_product(self, product_id: str, fields: ProductFields) -> bool:
        """Overwrite every field of an existing product. False if the id is absent."""

    @abstractmethod
    def delete_product(self, product_id: str) -> bool:
        ...

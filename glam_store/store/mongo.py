from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from glam_store.errors import ConflictError
from glam_store.util.time import utcnow_iso

from .base import Product, ProductFields, ProductStore, User, UserStore, normalize_email


def _debug(msg: str) -> None:
    print(f"[mongo] {msg}")


# password_hash is excluded unless explicitly requested
_USER_PUBLIC_PROJECTION = {"password_hash": 0}
_PRODUCT_PROJECTION = {"_id": 0}


def _doc_to_user(doc: Dict[str, Any]) -> User:
    return User(
        user_id=str(doc["_id"]),
        email=str(doc["email"]),
        name=str(doc.get("name") or ""),
        is_admin=bool(doc.get("is_admin")),
        created_at=str(doc.get("created_at") or ""),
        password_hash=doc.get("password_hash"),
    )


def _doc_to_product(doc: Dict[str, Any]) -> Product:
    return Product(
        id=str(doc["product_id"]),
        name=str(doc.get("name") or ""),
        price=float(doc.get("price") or 0),
        description=str(doc.get("description") or ""),
        image_url=str(doc.get("image_url") or ""),
        video_id=str(doc.get("video_id") or ""),
        stock=int(doc.get("stock") or 0),
        is_active=bool(doc.get("is_active")),
    )


def _fields_to_set(fields: ProductFields) -> Dict[str, Any]:
    update: Dict[str, Any] = {
        "price": float(fields.price),
        "description": fields.description,
        "image_url": fields.image_url,
        "video_id": fields.video_id,
        "stock": int(fields.stock),
        "is_active": bool(fields.is_active),
    }
    # Absent name keeps the stored one.
    if fields.name is not None:
        update["name"] = fields.name
    return update


class MongoUserStore(UserStore):
    """`users` collection. Uniqueness comes from a unique index on email."""

    def __init__(self, db: Any):
        self.col = db["users"]

    def init_schema(self) -> None:
        self.col.create_index([("email", ASCENDING)], unique=True)
        self.col.create_index([("created_at", DESCENDING)])

    def create_user(self, email: str, name: str, password_hash: str) -> str:
        doc = {
            "email": normalize_email(email),
            "name": name,
            "password_hash": password_hash,
            "is_admin": False,
            "created_at": utcnow_iso(),
        }
        try:
            result = self.col.insert_one(doc)
        except DuplicateKeyError as exc:
            raise ConflictError("User already exists") from exc
        return str(result.inserted_id)

    def find_by_email(self, email: str, include_password: bool = False) -> Optional[User]:
        e = normalize_email(email)
        if not e:
            return None
        projection = None if include_password else _USER_PUBLIC_PROJECTION
        doc = self.col.find_one({"email": e}, projection)
        return _doc_to_user(doc) if doc is not None else None

    def list_users(self) -> List[User]:
        cur = self.col.find({}, _USER_PUBLIC_PROJECTION).sort("created_at", DESCENDING)
        return [_doc_to_user(d) for d in cur]

    def upsert_admin(self, email: str, name: str, password_hash: str) -> Tuple[str, bool]:
        e = normalize_email(email)
        doc = self.col.find_one_and_update(
            {"email": e},
            {
                "$set": {"name": name, "password_hash": password_hash, "is_admin": True},
                "$setOnInsert": {"created_at": utcnow_iso()},
            },
            upsert=True,
            return_document=ReturnDocument.BEFORE,
        )
        if doc is not None:
            return str(doc["_id"]), False
        created = self.col.find_one({"email": e}, {"_id": 1})
        return str(created["_id"]), True

    def count_users(self) -> int:
        return int(self.col.count_documents({}))


class MongoProductStore(ProductStore):
    """`products` collection keyed by the public slug id (`product_id`)."""

    def __init__(self, db: Any):
        self.col = db["products"]

    def init_schema(self) -> None:
        self.col.create_index([("product_id", ASCENDING)], unique=True)
        self.col.create_index([("name", ASCENDING)])

    def list_products(self, include_inactive: bool = False) -> List[Product]:
        query: Dict[str, Any] = {}
        if not include_inactive:
            query = {"is_active": True, "stock": {"$gt": 0}}
        cur = self.col.find(query, _PRODUCT_PROJECTION).sort("name", ASCENDING)
        return [_doc_to_product(d) for d in cur]

    def get_product(self, product_id: str) -> Optional[Product]:
        doc = self.col.find_one({"product_id": product_id}, _PRODUCT_PROJECTION)
        return _doc_to_product(doc) if doc is not None else None

    def insert_product(self, product: Product) -> None:
        doc = product.to_dict()
        doc["product_id"] = doc.pop("id")
        try:
            self.col.insert_one(doc)
        except DuplicateKeyError as exc:
            _debug(f"duplicate product id {product.id}")
            raise ConflictError("Generated product id already exists") from exc

    def replace_product(self, product_id: str, fields: ProductFields) -> bool:
        doc = self.col.find_one_and_update(
            {"product_id": product_id},
            {"$set": _fields_to_set(fields)},
            return_document=ReturnDocument.AFTER,
        )
        return doc is not None

    def delete_product(self, product_id: str) -> bool:
        doc = self.col.find_one_and_delete({"product_id": product_id})
        return doc is not None

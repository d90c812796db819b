"""Catalog operations on top of a ProductStore.

Create and update share one defaulting rule: any field the caller leaves out
becomes 0 / "" / False. On update that means a PUT carrying only `name` wipes
price, description, media, stock and the active flag. Clients must always send
the full product.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping

from glam_store.errors import NotFound, ValidationError
from glam_store.store.base import Product, ProductFields, ProductStore
from glam_store.util.slug import make_product_id

# Largest value a signed 64-bit INTEGER column holds.
MAX_STOCK = 2**63 - 1


def _debug(msg: str) -> None:
    print(f"[catalog] {msg}")


def product_fields(data: Mapping[str, Any]) -> ProductFields:
    """Apply defaults to a (possibly partial) product payload."""
    name = data.get("name")
    price = data.get("price") or 0
    stock = data.get("stock") or 0
    if not math.isfinite(price) or price < 0:
        raise ValidationError("price must be a finite number >= 0")
    if stock < 0 or stock > MAX_STOCK:
        raise ValidationError(f"stock must be between 0 and {MAX_STOCK}")
    return ProductFields(
        name=str(name) if name else None,
        price=float(price),
        description=str(data.get("description") or ""),
        image_url=str(data.get("image_url") or ""),
        video_id=str(data.get("video_id") or ""),
        stock=int(stock),
        is_active=bool(data.get("is_active")),
    )


def list_products(store: ProductStore, *, include_inactive: bool = False) -> List[Product]:
    return store.list_products(include_inactive=include_inactive)


def get_product(store: ProductStore, product_id: str) -> Product:
    p = store.get_product(product_id)
    if p is None:
        raise NotFound("Product not found")
    return p


def create_product(store: ProductStore, data: Mapping[str, Any]) -> str:
    fields = product_fields(data)
    if not fields.name:
        raise ValidationError("Missing fields")
    product = Product.from_fields(make_product_id(fields.name), fields)
    store.insert_product(product)
    _debug(f"created product id={product.id}")
    return product.id


def update_product(store: ProductStore, product_id: str, data: Mapping[str, Any]) -> None:
    if not store.replace_product(product_id, product_fields(data)):
        raise NotFound("Product not found")
    _debug(f"updated product id={product_id}")


def delete_product(store: ProductStore, product_id: str) -> None:
    if not store.delete_product(product_id):
        raise NotFound("Product not found")
    _debug(f"deleted product id={product_id}")

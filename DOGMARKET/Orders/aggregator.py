# Orders/aggregator.py
"""
Order totals.

`build_order` prices line items against a product catalog and returns a new,
unsaved order record. Persisting it is the caller's job.

A line item whose product id is not in the catalog adds 0 to the total and
does not fail the order. Only a missing or non-list `items` is an error.
"""
import math
import time
from typing import Any, Iterable, List, Mapping, Sequence, Union

from DOGMARKET.core.errors import InvalidInput
from DOGMARKET.utils.ids import generate_id

ORDER_STATUS_PENDING = "pending"

Number = Union[int, float]


def effective_quantity(qty: Any) -> Number:
    """Missing, non-numeric, non-finite and non-positive quantities count as 1."""
    if isinstance(qty, bool) or not isinstance(qty, (int, float)):
        return 1
    if not math.isfinite(qty) or qty <= 0:
        return 1
    return qty


def normalize_items(items: Any) -> List[dict]:
    if items is None or isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InvalidInput("Items required")

    normalized = []
    for item in items:
        if not isinstance(item, Mapping) or not isinstance(item.get("productId"), str):
            raise InvalidInput("Each item must be an object with a string productId")
        normalized.append({
            "productId": item.get("productId"),
            "qty": effective_quantity(item.get("qty")),
        })
    return normalized


def line_subtotal(item: Mapping, catalog: Mapping[str, Mapping]) -> Number:
    product = catalog.get(item["productId"])
    if product is None:
        return 0
    price = product.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return 0
    return price * item["qty"]


def order_total(items: Iterable[Mapping], catalog: Mapping[str, Mapping]) -> Number:
    return sum(line_subtotal(item, catalog) for item in items)


def build_order(
    requester_id: str,
    items: Any,
    shipping: Any,
    catalog: Mapping[str, Mapping],
) -> dict:
    normalized = normalize_items(items)
    return {
        "id": generate_id("o"),
        "userId": requester_id,
        "items": normalized,
        "shipping": shipping,
        "total": order_total(normalized, catalog),
        "status": ORDER_STATUS_PENDING,
        "createdAt": int(time.time() * 1000),
    }


def catalog_from_products(products: Iterable[Mapping]) -> dict:
    """Index products by id. On duplicate ids the first one wins."""
    catalog = {}
    for product in products:
        catalog.setdefault(product.get("id"), product)
    return catalog

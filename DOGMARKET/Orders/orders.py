# Orders/orders.py
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException

from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.errors import InvalidInput
from DOGMARKET.core.security import get_current_user
from DOGMARKET.Orders.aggregator import build_order, catalog_from_products
from DOGMARKET.Orders.models import Order

logger = logging.getLogger("app.orders")

router = APIRouter(prefix="/api/orders", tags=["orders"])


def orders_visible_to(orders: List[dict], products: List[dict], user: dict) -> List[dict]:
    """
    Vendors see every order containing at least one of their products.
    Everyone else sees only the orders they placed.
    """
    if user.get("role") == "vendor":
        own_products = {p.get("id") for p in products if p.get("vendorId") == user["user_id"]}
        return [
            o for o in orders
            if any(
                isinstance(item.get("productId"), str) and item["productId"] in own_products
                for item in o.get("items") or []
            )
        ]
    return [o for o in orders if o.get("userId") == user["user_id"]]


@router.post("", response_model=Order)
async def place_order(
    payload: dict = Body(...),
    current_user: dict = Depends(get_current_user),
    store: JsonDocumentStore = Depends(get_store),
):
    """Body: `{"items": [{"productId": "p1", "qty": 2}], "shipping": {...}}`"""
    try:
        await store.read()
        order = build_order(
            current_user["user_id"],
            payload.get("items"),
            payload.get("shipping"),
            catalog_from_products(store.collection("products")),
        )
        store.collection("orders").append(order)
        await store.write()

        logger.info("Order %s placed by %s total=%s", order["id"], current_user["user_id"], order["total"])
        return order
    except (HTTPException, InvalidInput):
        raise
    except Exception as e:
        logger.exception("❌ place_order error: %s", e)
        raise HTTPException(status_code=500, detail=f"Error placing order: {str(e)}")


@router.get("", response_model=List[Order])
async def list_orders(
    current_user: dict = Depends(get_current_user),
    store: JsonDocumentStore = Depends(get_store),
):
    await store.read()
    return orders_visible_to(store.collection("orders"), store.collection("products"), current_user)

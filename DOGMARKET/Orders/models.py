# Orders/models.py
from pydantic import BaseModel
from typing import Any, List, Union


class OrderItem(BaseModel):
    productId: Any = None
    qty: Union[int, float] = 1


class Order(BaseModel):
    id: str
    userId: str
    items: List[OrderItem]
    shipping: Any = None
    total: Union[int, float]
    status: str = "pending"
    createdAt: int

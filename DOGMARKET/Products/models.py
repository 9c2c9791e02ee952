# Products/models.py
from pydantic import BaseModel, Field
from typing import Optional, Union


class Product(BaseModel):
    id: str
    title: str
    price: Union[int, float] = Field(..., ge=0)
    category: Optional[str] = None
    image: str = ""
    vendorId: Optional[str] = None
    createdAt: Optional[int] = None

# Vendors/models.py
from pydantic import BaseModel, Field, constr
from typing import Optional, Union

from DOGMARKET.utils.sanitize import SanitizedModel


class VendorInput(SanitizedModel):
    name: constr(min_length=1, max_length=100)
    location: Optional[constr(max_length=200)] = None


class Vendor(BaseModel):
    id: str
    name: str
    location: Optional[str] = None
    rating: Union[int, float] = Field(0, ge=0)

# Vets/models.py
import math
from pydantic import BaseModel, constr, field_validator
from typing import Optional

from DOGMARKET.utils.sanitize import SanitizedModel


class VetInput(SanitizedModel):
    name: constr(min_length=1, max_length=100)
    clinic: constr(min_length=1, max_length=150)
    license: constr(min_length=1, max_length=50)
    lat: Optional[float] = None
    lng: Optional[float] = None
    specialty: Optional[constr(max_length=100)] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def lenient_coordinate(cls, v):
        # Unparseable coordinates are stored as null rather than rejected.
        if v is None or isinstance(v, bool):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None


class Vet(BaseModel):
    id: str
    name: str
    clinic: str
    license: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    specialty: str = "General"
    dist: Optional[float] = None

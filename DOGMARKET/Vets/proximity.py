# Vets/proximity.py
"""
Proximity ranking for vet listings.

Pure functions over already-loaded vet records: nothing here reads or writes
the document store.
"""
import math
from typing import Iterable, List, Mapping, Optional

from DOGMARKET.core.errors import InvalidInput
from DOGMARKET.utils.geo import distance_km

DISTANCE_KEY = "dist"

# Distance given to a vet without usable coordinates.
UNREACHABLE = math.inf


def _coordinate(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def parse_query_point(query_point: Optional[Mapping]) -> Optional[tuple]:
    """Validate a `{lat, lng}` mapping. None means "no query point"."""
    if query_point is None:
        return None
    if not isinstance(query_point, Mapping):
        raise InvalidInput("Query point must be a mapping with lat and lng")

    lat = _coordinate(query_point.get("lat"))
    lng = _coordinate(query_point.get("lng"))
    if lat is None or lng is None:
        raise InvalidInput("Query point requires both numeric lat and lng")
    return lat, lng


def vet_distance(vet: Mapping, lat: float, lng: float) -> float:
    vet_lat = _coordinate(vet.get("lat"))
    vet_lng = _coordinate(vet.get("lng"))
    if vet_lat is None or vet_lng is None:
        return UNREACHABLE
    return distance_km(lat, lng, vet_lat, vet_lng)


def rank_vets(
    vets: Iterable[Mapping],
    query_point: Optional[Mapping] = None,
    radius_km: Optional[float] = None,
) -> List:
    """
    Annotate, filter and sort vets by distance from `query_point`.

    - No query point: the records come back as given, same order, no `dist`.
    - Otherwise each record is copied with a `dist` key in km. Vets missing
      coordinates get `UNREACHABLE` so they sort last and never fall inside
      a finite radius.
    - `radius_km` keeps only vets with `dist <= radius_km`.
    - Sorting is stable: equal distances keep collection order.
    """
    point = parse_query_point(query_point)
    if point is None:
        return list(vets)

    if radius_km is not None:
        if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)) or math.isnan(radius_km):
            raise InvalidInput("radius_km must be a number")

    lat, lng = point
    ranked = [{**vet, DISTANCE_KEY: vet_distance(vet, lat, lng)} for vet in vets]
    if radius_km is not None:
        ranked = [v for v in ranked if v[DISTANCE_KEY] <= radius_km]
    ranked.sort(key=lambda v: v[DISTANCE_KEY])
    return ranked

# Vets/vets.py
import math
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.security import require_role
from DOGMARKET.Vets.models import Vet, VetInput
from DOGMARKET.Vets.proximity import DISTANCE_KEY, rank_vets

logger = logging.getLogger("app.vets")

router = APIRouter(prefix="/api/vets", tags=["vets"])


def upsert_vet(vets: List[dict], record: dict) -> List[dict]:
    """Replace any profile with the same id; the new record goes to the end."""
    return [v for v in vets if v.get("id") != record["id"]] + [record]


def _render_distance(vet: dict) -> dict:
    # JSON has no infinity; unreachable vets are sent with dist=null
    if DISTANCE_KEY in vet and not math.isfinite(vet[DISTANCE_KEY]):
        return {**vet, DISTANCE_KEY: None}
    return vet


# ==============================
# PUBLIC: LIST / NEARBY
# ==============================
@router.get("", response_model=List[Vet], response_model_exclude_unset=True)
async def list_vets(
    lat: Optional[float] = Query(None, description="Latitude of the search origin"),
    lng: Optional[float] = Query(None, description="Longitude of the search origin"),
    radius_km: Optional[float] = Query(None, ge=0, description="Only vets within this many km"),
    store: JsonDocumentStore = Depends(get_store),
):
    """
    Without lat/lng: every vet in stored order.
    With lat/lng: vets sorted nearest first, each with `dist` in km.
    """
    await store.read()
    query_point = None
    if lat is not None or lng is not None:
        query_point = {"lat": lat, "lng": lng}

    ranked = rank_vets(store.collection("vets"), query_point, radius_km)
    return [_render_distance(v) for v in ranked]


# ==============================
# VET: REGISTER / REPLACE PROFILE
# ==============================
@router.post("", response_model=Vet, response_model_exclude_unset=True)
async def upsert_vet_profile(
    payload: VetInput,
    current_user: dict = Depends(require_role("vet", detail="Only users with role vet can register vet profile")),
    store: JsonDocumentStore = Depends(get_store),
):
    try:
        await store.read()
        vet = {
            "id": current_user["user_id"],
            "name": payload.name,
            "clinic": payload.clinic,
            "license": payload.license,
            "lat": payload.lat,
            "lng": payload.lng,
            "specialty": payload.specialty or "General",
        }
        store.data["vets"] = upsert_vet(store.collection("vets"), vet)
        await store.write()

        logger.info("Vet profile saved for %s", current_user["user_id"])
        return vet
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("❌ upsert_vet_profile error: %s", e)
        raise HTTPException(status_code=500, detail=f"Error saving vet profile: {str(e)}")

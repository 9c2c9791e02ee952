# Vendors/vendors.py
import logging
from typing import List, Tuple

from fastapi import APIRouter, Depends, HTTPException

from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.security import require_role
from DOGMARKET.Vendors.models import Vendor, VendorInput

logger = logging.getLogger("app.vendors")

router = APIRouter(prefix="/api/vendors", tags=["vendors"])


def register_vendor(vendors: List[dict], user_id: str, name: str, location: str = None) -> Tuple[dict, bool]:
    """
    Idempotent create: a vendor user gets at most one profile. If one exists it
    is returned untouched and the new name/location are ignored.
    Returns (profile, created).
    """
    existing = next((v for v in vendors if v.get("id") == user_id), None)
    if existing is not None:
        return existing, False

    vendor = {"id": user_id, "name": name, "location": location, "rating": 0}
    vendors.append(vendor)
    return vendor, True


@router.get("", response_model=List[Vendor])
async def list_vendors(store: JsonDocumentStore = Depends(get_store)):
    await store.read()
    return store.collection("vendors")


@router.post("", response_model=Vendor)
async def create_vendor_profile(
    payload: VendorInput,
    current_user: dict = Depends(require_role("vendor", detail="Only vendors can register vendor profile")),
    store: JsonDocumentStore = Depends(get_store),
):
    try:
        await store.read()
        vendor, created = register_vendor(
            store.collection("vendors"),
            current_user["user_id"],
            payload.name,
            payload.location,
        )
        if created:
            await store.write()
            logger.info("Vendor profile created for %s", current_user["user_id"])
        return vendor
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("❌ create_vendor_profile error: %s", e)
        raise HTTPException(status_code=500, detail=f"Error saving vendor profile: {str(e)}")

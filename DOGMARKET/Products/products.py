# Products/products.py
import time
import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.datastructures import UploadFile as StarletteUploadFile

from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.security import require_role
from DOGMARKET.media.upload import save_upload
from DOGMARKET.utils.ids import generate_id
from DOGMARKET.utils.sanitize import sanitize_text
from DOGMARKET.Products.models import Product

logger = logging.getLogger("app.products")

router = APIRouter(prefix="/api/products", tags=["products"])


# ==============================
# HELPERS
# ==============================
def search_products(products: List[dict], q: Optional[str]) -> List[dict]:
    """Case-insensitive substring match on title or category. Empty query returns everything."""
    q = (q or "").strip().lower()
    if not q:
        return list(products)
    return [
        p for p in products
        if q in (p.get("title") or "").lower() or q in (p.get("category") or "").lower()
    ]


def _form_text(value) -> str:
    return value if isinstance(value, str) else ""


def parse_price(raw: Optional[str]) -> Union[int, float]:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Price must be a number")
    if price != price or price < 0 or price == float("inf"):
        raise HTTPException(status_code=400, detail="Price must be a non-negative number")
    return int(price) if price.is_integer() else price


# ==============================
# PUBLIC: LIST / SEARCH
# ==============================
@router.get("", response_model=List[Product])
async def list_products(
    q: Optional[str] = Query(None, description="Search title or category"),
    store: JsonDocumentStore = Depends(get_store),
):
    await store.read()
    return search_products(store.collection("products"), q)


# ==============================
# VENDOR: CREATE
# ==============================
@router.post("", response_model=Product)
async def create_product(
    request: Request,
    current_user: dict = Depends(require_role("vendor", detail="Only vendors can create products")),
    store: JsonDocumentStore = Depends(get_store),
):
    """
    Multipart (or urlencoded) form with `title`, `price`, `category`, `image`.
    `image` may be an uploaded file or a plain URL/path string.
    """
    form = await request.form()
    title = sanitize_text(_form_text(form.get("title")), max_length=200)
    price = _form_text(form.get("price")).strip()
    if not title or not price:
        raise HTTPException(status_code=400, detail="Missing title or price")
    price_value = parse_price(price)

    try:
        image = form.get("image")
        if isinstance(image, StarletteUploadFile):
            image_path = await save_upload(image) if image.filename else ""
        else:
            image_path = sanitize_text(_form_text(image), max_length=500)

        await store.read()
        product = {
            "id": generate_id("p"),
            "title": title,
            "price": price_value,
            "category": sanitize_text(_form_text(form.get("category")), max_length=100),
            "image": image_path,
            "vendorId": current_user["user_id"],
            "createdAt": int(time.time() * 1000),
        }
        store.collection("products").insert(0, product)
        await store.write()

        logger.info("Product %s created by vendor %s", product["id"], current_user["user_id"])
        return product
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("❌ create_product error: %s", e)
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")

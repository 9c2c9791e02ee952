# file: DOGMARKET/main.py

# Standard library
import os
import time
import logging

# FastAPI core + responses
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# Rate limiting
from slowapi.errors import RateLimitExceeded

from DOGMARKET.core.config import CORS_ORIGINS, DB_FILE, LOG_LEVEL, PORT, UPLOAD_DIR, UPLOAD_URL_PREFIX
from DOGMARKET.core.database import JsonDocumentStore
from DOGMARKET.core.errors import InvalidInput
from DOGMARKET.core.rate_limit import limiter

# ------------------------------
# Routers
# ------------------------------
from DOGMARKET.USERS.user_routes import router as auth_router
from DOGMARKET.Products.products import router as products_router
from DOGMARKET.Vendors.vendors import router as vendors_router
from DOGMARKET.Vets.vets import router as vets_router
from DOGMARKET.Orders.orders import router as orders_router


# Logging setup
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("main")

STARTED_AT = time.monotonic()

# App initialization
app = FastAPI(title="DogMarket API", version="1.0.0")
app.state.store = JsonDocumentStore(DB_FILE)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Security headers
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    return response

# Rate limiter
app.state.limiter = limiter

@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    retry_after = str(getattr(exc.limit.limit, "get_expiry", lambda: 60)())
    response = JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": str(exc.detail),
        },
    )
    response.headers["Retry-After"] = retry_after
    return response


# ------------------------------
# Error translation
# ------------------------------
@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.info("Invalid input on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": jsonable_encoder(exc.errors())})


app.include_router(auth_router)
app.include_router(products_router)
app.include_router(vendors_router)
app.include_router(vets_router)
app.include_router(orders_router)

# Product images
app.mount(
    UPLOAD_URL_PREFIX,
    StaticFiles(directory=UPLOAD_DIR, check_dir=False),
    name="uploads"
)


# Health check
@app.get("/api/health")
async def health():
    return {"status": "ok", "uptime": round(time.monotonic() - STARTED_AT, 3)}


@app.on_event("startup")
async def startup_event():
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    await app.state.store.init()
    logger.info("DogMarket API ready on port %s", PORT)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("DOGMARKET.main:app", host="0.0.0.0", port=PORT)

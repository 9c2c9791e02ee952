# USERS/user_routes.py
import time
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from DOGMARKET.core.audit import log_auth_failure, log_signup
from DOGMARKET.core.database import JsonDocumentStore, get_store
from DOGMARKET.core.rate_limit import auth_limit
from DOGMARKET.core.security import get_password_hash, token_for_user, verify_password
from DOGMARKET.utils.ids import generate_id

from .models import AuthResponse, LoginInput, RegisterInput, UserPublic

logger = logging.getLogger("app.users")

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _public(user: dict) -> UserPublic:
    return UserPublic(id=user["id"], name=user["name"], email=user["email"], role=user["role"])


@router.post("/register", response_model=AuthResponse)
@auth_limit
async def register(
    request: Request,
    response: Response,
    user: RegisterInput,
    store: JsonDocumentStore = Depends(get_store),
):
    ip = request.client.host if request.client else None
    try:
        await store.read()
        users = store.collection("users")
        if any(u.get("email", "").lower() == user.email for u in users):
            log_auth_failure(actor=user.email, ip=ip, reason="duplicate_email")
            raise HTTPException(status_code=400, detail="Email exists")

        record = {
            "id": generate_id("u"),
            "name": user.name,
            "email": user.email,
            "password": get_password_hash(user.password),
            "role": user.role,
            "createdAt": int(time.time() * 1000),
        }
        users.append(record)
        await store.write()

        log_signup(actor=record["id"], ip=ip, role=record["role"])
        return AuthResponse(token=token_for_user(record), user=_public(record))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("❌ register error: %s", e)
        raise HTTPException(status_code=500, detail="Error registering user")


@router.post("/login", response_model=AuthResponse)
@auth_limit
async def login(
    request: Request,
    response: Response,
    credentials: LoginInput,
    store: JsonDocumentStore = Depends(get_store),
):
    ip = request.client.host if request.client else None
    await store.read()
    user = next(
        (u for u in store.collection("users") if u.get("email", "").lower() == credentials.email),
        None,
    )
    if not user or not verify_password(credentials.password, user.get("password", "")):
        log_auth_failure(actor=credentials.email, ip=ip, reason="invalid_credentials")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return AuthResponse(token=token_for_user(user), user=_public(user))

# file: DOGMARKET/core/security.py
from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext

from DOGMARKET.core.config import ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, get_secret_key
from DOGMARKET.core.database import JsonDocumentStore, get_store


# ---------------------------
# Logging
# ---------------------------
logger = logging.getLogger("core.security")

# ---------------------------
# Password Hashing (bcrypt 72-byte safe)
# ---------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
BCRYPT_BYTE_LIMIT = 72

def _normalize_and_truncate_password(password: str) -> str:
    """
    Ensure password is a str, remove control characters, then truncate
    safely to BCRYPT_BYTE_LIMIT bytes (not characters).
    """
    if password is None:
        raise ValueError("Password cannot be None")

    if not isinstance(password, str):
        password = str(password)

    cleaned = "".join(ch for ch in password if ord(ch) >= 32)

    b = cleaned.encode("utf-8")
    if len(b) > BCRYPT_BYTE_LIMIT:
        logger.debug("Password bytes exceeded bcrypt limit; truncating from %d bytes", len(b))
        b = b[:BCRYPT_BYTE_LIMIT]

    # Drop any multi-byte character cut in half by the truncation.
    return b.decode("utf-8", "ignore")

def get_password_hash(password: str) -> str:
    """Hash the provided password using bcrypt, after safely truncating it."""
    return pwd_context.hash(_normalize_and_truncate_password(password))

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against stored bcrypt hash."""
    try:
        return pwd_context.verify(_normalize_and_truncate_password(plain_password), hashed_password)
    except Exception as e:
        logger.exception("Password verification error: %s", e)
        raise


# ---------------------------
# Token Creation
# ---------------------------
def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)

def token_for_user(user: dict) -> str:
    return create_access_token(
        data={
            "sub": user["email"],
            "user_id": user["id"],
            "name": user.get("name"),
            "role": user["role"],
        }
    )


# ---------------------------
# Dependency: Current User (JWT only)
# ---------------------------
security = HTTPBearer(auto_error=False)

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: JsonDocumentStore = Depends(get_store),
):
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    try:
        payload = jwt.decode(credentials.credentials, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning("JWT error: %s", str(e))
        raise HTTPException(status_code=401, detail="Invalid token")

    sub = payload.get("sub")
    role = payload.get("role")
    user_id = payload.get("user_id")
    if not sub or not role or not user_id:
        logger.warning("Invalid JWT payload: %s", payload)
        raise HTTPException(status_code=401, detail="Invalid token")

    await store.read()
    if not any(u.get("id") == user_id for u in store.collection("users")):
        logger.warning("Token for unknown user_id=%s", user_id)
        raise HTTPException(status_code=401, detail="User not found")

    user = {
        "user_id": user_id,
        "email": sub,
        "name": payload.get("name"),
        "role": role,
    }
    request.scope["user"] = user
    logger.debug("Authenticated user context: %s", user)
    return user


# ---------------------------
# Role-Based Dependencies
# ---------------------------
def require_role(*roles: str, detail: Optional[str] = None):
    """
    Build a dependency that only lets through users whose role is one of `roles`.
    Runs before the endpoint body, so no domain logic executes on a 403.
    """
    message = detail or f"Requires role: {' or '.join(roles)}"

    async def checker(current_user: dict = Depends(get_current_user)):
        if current_user.get("role") not in roles:
            raise HTTPException(status_code=403, detail=message)
        return current_user

    return checker

# file: DOGMARKET/core/config.py
import os
import logging

logger = logging.getLogger("core.config")

# ==============================
# Storage
# ==============================
DB_FILE = os.getenv("DB_FILE", "db.json")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"

COLLECTIONS = ("users", "products", "vendors", "vets", "orders")

# ==============================
# Roles
# ==============================
ROLES = ("buyer", "vendor", "vet")

# ==============================
# Security Settings
# ==============================
SECRET_KEY = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY")
DEV_SECRET_KEY = "change_this_secret_in_prod"
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))

# ==============================
# HTTP
# ==============================
PORT = int(os.getenv("PORT", "4000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "20/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in {"1", "true", "yes"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_secret_key() -> str:
    """
    Return the JWT signing key from the environment, falling back to the
    development key when none is configured.
    """
    global SECRET_KEY
    if not SECRET_KEY:
        logger.warning("JWT_SECRET not set; using development signing key")
        SECRET_KEY = DEV_SECRET_KEY
    return SECRET_KEY

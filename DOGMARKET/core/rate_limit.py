from slowapi import Limiter
from slowapi.util import get_remote_address

from DOGMARKET.core.config import AUTH_RATE_LIMIT, RATE_LIMIT_ENABLED

# ✅ Shared limiter; main.py attaches it to app.state
limiter = Limiter(
    key_func=get_remote_address,
    headers_enabled=True,
    enabled=RATE_LIMIT_ENABLED,
)

# Endpoints decorated with this must accept `request: Request` and `response: Response`.
auth_limit = limiter.limit(AUTH_RATE_LIMIT)

# DOGMARKET/core/audit.py
import logging
from datetime import datetime, timezone

audit_logger = logging.getLogger("app.audit")


def log_event(
    action: str,
    actor: str = None,
    ip: str = None,
    category: str = "system",
    severity: str = "INFO",
    metadata: dict = None
):
    """
    Generic audit logger.
    Emits one structured line per event on the `app.audit` logger.
    """
    record = {
        "actor": actor or "anonymous",
        "action": action,
        "ip": ip,
        "category": category,       # e.g., auth, system
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "metadata": metadata or {},
    }
    audit_logger.log(
        getattr(logging, severity.upper(), logging.INFO),
        "[%s] %s actor=%s ip=%s metadata=%s",
        category,
        action,
        record["actor"],
        ip,
        record["metadata"],
        extra={"audit": record},
    )
    return record


# -----------------------------
# Helper functions for auth
# -----------------------------

def log_auth_failure(actor: str, ip: str, reason: str):
    return log_event(
        "auth_failure",
        actor=actor,
        ip=ip,
        category="auth",
        severity="WARNING",
        metadata={"reason": reason},
    )

def log_signup(actor: str, ip: str, role: str):
    return log_event(
        "signup_success",
        actor=actor,
        ip=ip,
        category="auth",
        metadata={"role": role},
    )

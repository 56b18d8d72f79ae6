"""Session validity checks applied after a cookie has been decoded."""
from __future__ import annotations

from enum import Enum

from .registry import AccountRegistry
from .tokens import SessionPayload, now_ms

# 8 hours; a session exactly this old is still valid.
SESSION_LIFETIME_MS = 8 * 60 * 60 * 1000


class SessionStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    UNKNOWN = "unknown"
    REVOKED = "revoked"


def validate(payload: SessionPayload, registry: AccountRegistry, now=None, revocations=None,
             lifetime_ms: int = SESSION_LIFETIME_MS) -> SessionStatus:
    now = now_ms() if now is None else now
    if now - payload.issued_at > lifetime_ms:
        return SessionStatus.EXPIRED
    account = registry.get(payload.username)
    if account is None or account.id != payload.account_id or account.role != payload.role:
        return SessionStatus.UNKNOWN
    if revocations is not None and revocations.is_revoked(payload.token_id):
        return SessionStatus.REVOKED
    return SessionStatus.VALID

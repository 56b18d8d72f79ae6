"""
Deny-list for sessions revoked before their natural expiry.

Entries live in Django's cache keyed by the token id and expire together
with the token, so the list never grows beyond the set of live sessions.
When the cache backend is unreachable every session counts as revoked.
"""
from __future__ import annotations

import logging

from django.core.cache import caches
from django_redis.exceptions import ConnectionInterrupted

from .tokens import SessionPayload, now_ms

logger = logging.getLogger("accounts.gate")

KEY_PREFIX = "session:revoked:"


class RevocationList:
    def __init__(self, max_age_seconds: int, cache_alias: str = "default"):
        self.max_age_ms = max_age_seconds * 1000
        self.cache_alias = cache_alias

    @property
    def cache(self):
        return caches[self.cache_alias]

    def revoke(self, payload: SessionPayload, now: int | None = None) -> bool:
        """Deny the session until it would have expired anyway.

        Returns False when the session is already past its lifetime or the
        cache could not be written.
        """
        now = now_ms() if now is None else now
        remaining_ms = payload.issued_at + self.max_age_ms - now
        if remaining_ms <= 0:
            return False
        timeout = -(-remaining_ms // 1000)  # ceil to whole seconds
        try:
            self.cache.set(KEY_PREFIX + payload.token_id, payload.username, timeout)
        except ConnectionInterrupted:
            logger.warning("revocation cache unavailable, session %s not revoked", payload.token_id)
            return False
        return True

    def is_revoked(self, token_id: str) -> bool:
        try:
            return self.cache.get(KEY_PREFIX + token_id) is not None
        except ConnectionInterrupted:
            logger.warning("revocation cache unavailable, treating session %s as revoked", token_id)
            return True

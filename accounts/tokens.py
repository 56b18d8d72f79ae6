"""
Session token encoding.

The cookie value is ``django.core.signing`` output: compact JSON claims,
URL-safe base64 encoded and followed by an HMAC-SHA256 signature keyed by
``SECRET_KEY``.  Claims stay readable to the client but cannot be changed
without invalidating the signature.
"""
from __future__ import annotations

import re
import secrets
import time
from dataclasses import dataclass

from django.core import signing

from .exceptions import DecodeFailure
from .policy import Role
from .registry import ACCOUNT_ID_RE, USERNAME_RE, Account

TOKEN_RE = re.compile(r"^[A-Za-z0-9_\-:.]+$")
TOKEN_ID_RE = re.compile(r"^[A-Za-z0-9_-]{8,64}$")
MAX_TOKEN_LENGTH = 4096

DEFAULT_SALT = "tibbna.accounts.session"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SessionPayload:
    account_id: str
    username: str
    role: Role
    issued_at: int
    token_id: str

    def claims(self) -> dict:
        return {
            "uid": self.account_id,
            "username": self.username,
            "role": self.role.value,
            "iat": self.issued_at,
            "jti": self.token_id,
        }


class SessionCodec:
    """Encode accounts into signed cookie values and back."""

    def __init__(self, salt: str = DEFAULT_SALT, key: str | None = None):
        self.salt = salt
        self.key = key

    def encode(self, account: Account, issued_at: int | None = None) -> str:
        payload = SessionPayload(
            account_id=account.id,
            username=account.username,
            role=account.role,
            issued_at=now_ms() if issued_at is None else int(issued_at),
            token_id=secrets.token_urlsafe(16),
        )
        return signing.dumps(payload.claims(), key=self.key, salt=self.salt, compress=False)

    def decode(self, token) -> SessionPayload:
        if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
            raise DecodeFailure()
        if not TOKEN_RE.fullmatch(token):
            raise DecodeFailure()
        try:
            claims = signing.loads(token, key=self.key, salt=self.salt)
        except (signing.BadSignature, ValueError, TypeError) as exc:
            raise DecodeFailure() from exc
        return self._payload_from_claims(claims)

    @staticmethod
    def _payload_from_claims(claims) -> SessionPayload:
        if not isinstance(claims, dict):
            raise DecodeFailure()
        uid = claims.get("uid")
        username = claims.get("username")
        iat = claims.get("iat")
        jti = claims.get("jti")
        role = Role.parse(claims.get("role"))
        # bool is an int subclass
        if not isinstance(iat, int) or isinstance(iat, bool) or iat < 0:
            raise DecodeFailure()
        if not isinstance(uid, str) or not ACCOUNT_ID_RE.fullmatch(uid):
            raise DecodeFailure()
        if not isinstance(username, str) or not USERNAME_RE.fullmatch(username):
            raise DecodeFailure()
        if not isinstance(jti, str) or not TOKEN_ID_RE.fullmatch(jti):
            raise DecodeFailure()
        if role is None:
            raise DecodeFailure()
        return SessionPayload(account_id=uid, username=username, role=role, issued_at=iat, token_id=jti)

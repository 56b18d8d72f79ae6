"""
DRF authentication backed by the ``session`` cookie.

API views see the same identity the session gate resolved: the cookie is
decoded with the shared codec and validated against the shared registry.
Invalid or expired cookies authenticate nobody; they never produce an
error on their own.
"""
from __future__ import annotations

from rest_framework import authentication

from .apps import gate
from .conf import gate_setting
from .cookies import session_cookie
from .exceptions import ExpiredSession, MalformedSession, UnknownAccount
from .registry import Account
from .tokens import SessionPayload
from .validation import SessionStatus, validate


class SessionUser:
    """Minimal user object for ``request.user`` on API views."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, account: Account, session: SessionPayload):
        self.account = account
        self.session = session

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def username(self) -> str:
        return self.account.username

    @property
    def role(self):
        return self.account.role

    def __str__(self) -> str:
        return f"{self.account.username} ({self.account.role.value})"


def resolve_session(request, now=None) -> tuple[Account, SessionPayload]:
    """Return the account and claims behind the request's cookie.

    Raises ``MalformedSession`` when there is no usable cookie,
    ``ExpiredSession`` or ``UnknownAccount`` when it no longer grants access.
    """
    conf = gate()
    token = session_cookie(request)
    if token is None:
        raise MalformedSession("Not authenticated")
    payload = conf.codec.decode(token)
    status = validate(payload, conf.registry, now=now, revocations=conf.revocations,
                      lifetime_ms=gate_setting("MAX_AGE") * 1000)
    if status is SessionStatus.EXPIRED:
        raise ExpiredSession()
    if status is not SessionStatus.VALID:
        raise UnknownAccount()
    return conf.registry.get(payload.username), payload


class SessionCookieAuthentication(authentication.BaseAuthentication):
    def authenticate(self, request):
        try:
            account, payload = resolve_session(request)
        except (MalformedSession, ExpiredSession, UnknownAccount):
            return None
        return SessionUser(account, payload), payload

    def authenticate_header(self, request):
        # Makes DRF answer 401 rather than 403 for anonymous requests.
        return 'Session'

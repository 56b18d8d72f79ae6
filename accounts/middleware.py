"""
Session gate.

Every request passes through :class:`SessionGateMiddleware` before any
view runs.  The decision itself is made by :func:`evaluate_request`, a
pure function of the path, the cookie value and the gate collaborators,
so it can be exercised without a request object.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from django.http import HttpResponseRedirect, JsonResponse

from .apps import gate
from .conf import gate_setting
from .cookies import clear_session_cookie, session_cookie
from .exceptions import DecodeFailure
from .registry import Account
from .validation import SessionStatus, validate

logger = logging.getLogger("accounts.gate")


class Outcome(str, Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect-login"
    REDIRECT_UNAUTHORIZED = "redirect-unauthorized"


@dataclass(frozen=True)
class GateDecision:
    outcome: Outcome
    account: Account | None = None
    clear_cookie: bool = False
    reason: str = ""


def is_public(path: str) -> bool:
    if path in gate_setting("PUBLIC_PATHS"):
        return True
    return any(path.startswith(p) for p in gate_setting("PUBLIC_PREFIXES"))


def evaluate_request(path, cookie_value, registry, codec, policy, now=None, revocations=None) -> GateDecision:
    if is_public(path):
        return GateDecision(Outcome.ALLOW, reason="public")
    if not cookie_value:
        return GateDecision(Outcome.REDIRECT_LOGIN, reason="no session")

    try:
        payload = codec.decode(cookie_value)
    except DecodeFailure:
        return GateDecision(Outcome.REDIRECT_LOGIN, clear_cookie=True, reason="malformed session")

    status = validate(payload, registry, now=now, revocations=revocations,
                      lifetime_ms=gate_setting("MAX_AGE") * 1000)
    if status is not SessionStatus.VALID:
        return GateDecision(Outcome.REDIRECT_LOGIN, clear_cookie=True, reason=f"{status.value} session")

    account = registry.get(payload.username)
    if not policy.is_authorized(account.role, path):
        return GateDecision(Outcome.REDIRECT_UNAUTHORIZED, account=account, reason="role lacks module")
    return GateDecision(Outcome.ALLOW, account=account)


def login_redirect_url(path: str) -> str:
    return f"{gate_setting('LOGIN_URL')}?{urlencode({'returnTo': path})}"


class SessionGateMiddleware:
    """Redirect requests without a valid session or without module access.

    Paths under ``/api/`` get JSON errors instead of redirects.  On success
    the resolved account is available as ``request.account``.
    """
    API_PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or '/'
        conf = gate()
        decision = evaluate_request(
            path,
            session_cookie(request),
            conf.registry,
            conf.codec,
            conf.policy,
            revocations=conf.revocations,
        )
        request.account = decision.account

        if decision.outcome is Outcome.ALLOW:
            return self.get_response(request)

        logger.info("gate %s for %s %s (%s)", decision.outcome.value, request.method, path, decision.reason)
        is_api = path.startswith(self.API_PREFIX)
        if decision.outcome is Outcome.REDIRECT_UNAUTHORIZED:
            if is_api:
                return JsonResponse({'error': 'Forbidden'}, status=403)
            return HttpResponseRedirect(gate_setting('UNAUTHORIZED_URL'))

        if is_api:
            response = JsonResponse({'error': 'Not authenticated'}, status=401)
        else:
            response = HttpResponseRedirect(login_redirect_url(path))
        if decision.clear_cookie:
            clear_session_cookie(response)
        return response

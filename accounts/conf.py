"""Access to the ``SESSION_GATE`` settings dict with defaults filled in."""
from __future__ import annotations

from django.conf import settings

DEFAULTS = {
    "COOKIE_NAME": "session",
    "MAX_AGE": 60 * 60 * 8,
    "COOKIE_SECURE": False,
    "COOKIE_SAMESITE": "Lax",
    "LOGIN_URL": "/login",
    "UNAUTHORIZED_URL": "/unauthorized",
    "PUBLIC_PATHS": ["/login", "/unauthorized"],
    "PUBLIC_PREFIXES": ["/api/auth/", "/static/"],
    "ACCOUNTS_FILE": None,
    "ROLE_MODULES": None,
    "REVOCATION": False,
    "SALT": "tibbna.accounts.session",
}


def gate_setting(name: str):
    # Read on every call so that tests overriding settings see the change.
    conf = getattr(settings, "SESSION_GATE", {}) or {}
    return conf.get(name, DEFAULTS[name])

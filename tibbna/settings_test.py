"""
Settings used by the test suite.

Identical to :mod:`tibbna.settings` except for a fast password hasher,
no login throttling and plain static files storage.
"""
from .settings import *  # noqa: F401,F403
from .settings import REST_FRAMEWORK, SESSION_GATE

ENV = "test"

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    # The login view throttles itself; a None rate lets every request through.
    "DEFAULT_THROTTLE_RATES": {"login": None},
}

SESSION_GATE = {
    **SESSION_GATE,
    "COOKIE_SECURE": False,
    "REVOCATION": True,
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "tibbna-test",
    }
}

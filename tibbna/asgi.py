"""
ASGI config for the Tibbna project.

HTTP only; the session gate middleware runs identically under ASGI and
WSGI since it never awaits anything.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tibbna.settings")

application = get_asgi_application()

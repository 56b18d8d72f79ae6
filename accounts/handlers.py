"""Unified DRF exception handler: every API error body is ``{"error": ...}``."""
from __future__ import annotations

import logging

from rest_framework.exceptions import Throttled
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger("accounts.api")

THROTTLED_MESSAGE = "Too many attempts"


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception("unhandled error in %s", view.__class__.__name__ if view else 'api view', exc_info=exc)
        return Response({'error': 'Internal server error'}, status=500)
    # no wait time, neither in the body nor in Retry-After
    if isinstance(exc, Throttled):
        return Response({'error': THROTTLED_MESSAGE}, status=resp.status_code)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data.get('error') or resp.data
    else:
        detail = resp.data
    return Response({'error': detail}, status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp) -> dict[str, str]:
    return {'WWW-Authenticate': resp['WWW-Authenticate']} if resp.has_header('WWW-Authenticate') else {}

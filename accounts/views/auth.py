"""
Login, logout and session introspection endpoints.

Responses follow the front-end contract: ``{success, user}`` on login,
``{success}`` on logout, ``{user}`` from the session endpoint and
``{error}`` for every failure.  Failures never say whether a username
exists.
"""
from __future__ import annotations

import logging

from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import SimpleRateThrottle

from ..apps import gate
from ..authentication import resolve_session
from ..cookies import clear_session_cookie, set_session_cookie
from ..exceptions import AuthError, ExpiredSession, InvalidCredentials, MalformedSession, MissingCredentials, UnknownAccount
from ..serializers.auth import LoginSerializer
from ..services.audit import client_ip, log_action

logger = logging.getLogger("accounts.auth")


class LoginRateThrottle(SimpleRateThrottle):
    """Per client IP, rate from ``DEFAULT_THROTTLE_RATES['login']``."""
    scope = 'login'

    def get_cache_key(self, request, view):
        return self.cache_format % {'scope': self.scope, 'ident': self.get_ident(request)}


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """
    Username/password login.
    Accepts JSON ``{"username": ..., "password": ...}``; on success sets the
    ``session`` cookie and returns the account profile.
    """
    s = LoginSerializer(data=request.data)
    if not s.is_valid():
        return Response({'error': MissingCredentials.message}, status=400)
    username = s.validated_data['username']
    password = s.validated_data['password']

    conf = gate()
    ip = client_ip(request)
    try:
        account = conf.registry.authenticate(username, password)
    except InvalidCredentials as exc:
        log_action(username=username, action='login', result='fail', ip=ip)
        return Response({'error': str(exc)}, status=401)

    token = conf.codec.encode(account)
    log_action(username=account.username, action='login', result='ok', ip=ip,
               detail={'role': account.role.value})

    response = Response({'success': True, 'user': account.profile(conf.policy)}, status=200)
    set_session_cookie(response, token)
    return response


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def logout_view(request):
    """Clear the session cookie; revoke the presented session when possible."""
    conf = gate()
    username = None
    if conf.revocations is not None:
        try:
            account, payload = resolve_session(request)
        except (MalformedSession, ExpiredSession, UnknownAccount):
            logger.debug("logout without a valid session")
        else:
            conf.revocations.revoke(payload)
            username = account.username
    log_action(username=username, action='logout', result='ok', ip=client_ip(request))

    response = Response({'success': True}, status=200)
    clear_session_cookie(response)
    return response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def session_view(request):
    """Return the profile behind the session cookie, or 401."""
    try:
        account, _ = resolve_session(request)
    except AuthError as exc:
        return Response({'error': str(exc)}, status=401)
    return Response({'user': account.profile(gate().policy)})

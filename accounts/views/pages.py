"""
Dashboard page endpoints.

Rendering lives in the front-end; these views only describe the page the
client asked for so that the session gate has real routes to protect.
Module pages check access again through :class:`HasModuleAccess`.
"""
from __future__ import annotations

from django.http import HttpResponseRedirect, JsonResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..apps import gate
from ..authentication import resolve_session
from ..exceptions import AuthError
from ..permissions import HasModuleAccess

MODULES = ('finance', 'hr', 'inventory', 'reception')


def safe_return_to(value) -> str:
    """Only same-site absolute paths are accepted as post-login targets."""
    if not value or not value.startswith('/') or value.startswith('//') or '\\' in value:
        return '/'
    # browsers drop tab and newline, so "/\t/host" would become "//host"
    if any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in value):
        return '/'
    return value


def root(request):
    account = getattr(request, 'account', None)
    if account is None:
        return HttpResponseRedirect('/login')
    return HttpResponseRedirect(gate().policy.home_for(account.role))


def login_page(request):
    return JsonResponse({
        'page': 'login',
        'returnTo': safe_return_to(request.GET.get('returnTo')),
        'endpoint': '/api/auth/login',
    })


def unauthorized_page(request):
    """Shown to authenticated users who opened a module outside their role."""
    conf = gate()
    payload = {
        'page': 'unauthorized',
        'error': 'Forbidden',
        'message': 'Your role does not grant access to this module.',
        'user': None,
        'home': '/login',
    }
    try:
        account, _ = resolve_session(request)
    except AuthError:
        account = None
    if account is not None:
        payload['user'] = account.profile(conf.policy)
        payload['home'] = conf.policy.home_for(account.role)
    return JsonResponse(payload, status=403)


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasModuleAccess])
def dashboard(request):
    account = request.user.account
    return Response({
        'page': 'dashboard',
        'user': account.profile(gate().policy),
        'modules': [m for m in MODULES if gate().policy.is_authorized(account.role, f'/{m}')],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, HasModuleAccess])
def module_page(request, module, subpath=''):
    return Response({
        'page': module,
        'path': request.path,
        'section': subpath or None,
        'user': request.user.account.profile(gate().policy),
    })

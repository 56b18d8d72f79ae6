"""
Permission classes re-deriving module access on API views.

The session gate is the canonical check; these classes ask the same
:class:`~accounts.policy.AccessPolicy` again so that a view never relies on
the middleware having run.
"""
from rest_framework.permissions import BasePermission

from .apps import gate


def _session_role(request):
    user = getattr(request, "user", None)
    if not (user and getattr(user, "is_authenticated", False)):
        return None
    return getattr(user, "role", None)


class HasModuleAccess(BasePermission):
    """Role must be allowed to reach the request path."""
    message = "Forbidden"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        role = _session_role(request)
        return bool(role and gate().policy.is_authorized(role, request.path))


class IsSuperAdmin(BasePermission):
    """Only the wildcard role."""
    message = "Forbidden"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        role = _session_role(request)
        return bool(role and gate().policy.is_super(role))

"""
URL configuration for the Tibbna ERP backend.

API and page routes come from the accounts app.  OpenAPI documentation is
exposed at ``/swagger/`` and ``/redoc/``; the session gate restricts both
to the super role.
"""
from django.urls import path, include

from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from accounts.permissions import IsSuperAdmin

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Tibbna ERP API",
    default_version='v1',
    description="Authentication and session endpoints for the Tibbna ERP dashboards.",
)

schema_view = get_schema_view(
    api_info,
    public=False,
    permission_classes=(IsSuperAdmin,),
)

urlpatterns = [
    path('', include('accounts.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]

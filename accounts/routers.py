"""
URL mappings for the auth API and the dashboard pages.

Paths mirror the front-end routes exactly; trailing slashes are
deliberately omitted.
"""
from django.urls import path

from .views import health
from .views.auth import login_view, logout_view, session_view
from .views.pages import MODULES, dashboard, login_page, module_page, root, unauthorized_page

urlpatterns = [
    # Auth API
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/session', session_view, name='session_view'),

    # Pages
    path('', root, name='root'),
    path('login', login_page, name='login_page'),
    path('unauthorized', unauthorized_page, name='unauthorized_page'),
    path('dashboard', dashboard, name='dashboard'),

    # Health
    path('healthz', health.healthz, name='healthz'),
]

for module in MODULES:
    urlpatterns += [
        path(module, module_page, {'module': module}, name=f'{module}_page'),
        path(f'{module}/<path:subpath>', module_page, {'module': module}, name=f'{module}_section'),
    ]

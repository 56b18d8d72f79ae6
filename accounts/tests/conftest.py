import pytest
from django_redis.exceptions import ConnectionInterrupted
from rest_framework.test import APIClient

from accounts.apps import gate
from accounts.registry import load_accounts
from accounts.revocation import RevocationList

EIGHT_HOURS_MS = 8 * 60 * 60 * 1000

SEED = [
    {'id': '1', 'username': 'superadmin', 'password': 'super123', 'name': 'Super Administrator',
     'email': 'superadmin@tibbna.iq', 'role': 'SUPER_ADMIN'},
    {'id': '2', 'username': 'finance', 'password': 'finance123', 'name': 'Finance Administrator',
     'email': 'finance@tibbna.iq', 'role': 'FINANCE_ADMIN'},
    {'id': '3', 'username': 'hr', 'password': 'hr123', 'name': 'HR Administrator',
     'email': 'hr@tibbna.iq', 'role': 'HR_ADMIN'},
]


@pytest.fixture
def registry():
    return load_accounts(SEED)


@pytest.fixture
def conf():
    return gate()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def cookie_for(conf):
    """Return a session cookie value for a loaded account, optionally backdated."""
    def make(username, issued_at=None):
        return conf.codec.encode(conf.registry.get(username), issued_at=issued_at)
    return make


class UnreachableCache:
    """Stands in for a Redis cache whose server is down."""

    def get(self, *args, **kwargs):
        raise ConnectionInterrupted(connection=None)

    set = get


@pytest.fixture
def cache_down(monkeypatch):
    monkeypatch.setattr(RevocationList, 'cache', property(lambda self: UnreachableCache()))

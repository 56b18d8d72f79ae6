"""
Integration tests for the auth endpoints.

These exercise login, logout and session introspection through DRF's
APIClient, including the cookie attributes and the error contract the
front-end relies on.
"""
import pytest
from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APISimpleTestCase

from accounts.apps import gate
from accounts.tokens import now_ms
from accounts.views.auth import LoginRateThrottle

EIGHT_HOURS_MS = 8 * 60 * 60 * 1000


class AuthAPITests(APISimpleTestCase):
    def setUp(self) -> None:
        self.client = APIClient()
        self.conf = gate()

    def login(self, username, password, client=None):
        client = client or self.client
        return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')

    def cookie_for(self, username, issued_at=None):
        return self.conf.codec.encode(self.conf.registry.get(username), issued_at=issued_at)

    # -----------------------------------------------------------------
    # login
    # -----------------------------------------------------------------
    def test_login_returns_profile_and_sets_cookie(self):
        response = self.login('hr', 'hr123')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'success': True,
            'user': {
                'id': '3',
                'username': 'hr',
                'name': 'HR Administrator',
                'email': 'hr@tibbna.iq',
                'role': 'HR_ADMIN',
                'allowedModules': ['/hr'],
            },
        })
        morsel = response.cookies['session']
        self.assertTrue(morsel.value)
        self.assertTrue(morsel['httponly'])
        self.assertEqual(morsel['samesite'], 'Lax')
        self.assertEqual(morsel['max-age'], 28800)
        self.assertEqual(morsel['path'], '/')
        self.assertFalse(morsel['secure'])

    def test_login_normalises_username(self):
        response = self.login('  HR ', 'hr123')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['username'], 'hr')

    def test_issued_cookie_decodes_to_the_account(self):
        before = now_ms()
        token = self.login('finance', 'finance123').cookies['session'].value
        payload = self.conf.codec.decode(token)
        self.assertEqual((payload.account_id, payload.username, payload.role.value), ('2', 'finance', 'FINANCE_ADMIN'))
        self.assertGreaterEqual(payload.issued_at, before)

    @override_settings(SESSION_GATE={'COOKIE_SECURE': True, 'COOKIE_NAME': 'session', 'MAX_AGE': 28800})
    def test_secure_flag_in_production(self):
        response = self.login('hr', 'hr123')
        self.assertTrue(response.cookies['session']['secure'])

    def test_missing_fields_are_rejected(self):
        for body in ({}, {'username': 'hr'}, {'password': 'hr123'}, {'username': '   ', 'password': 'x'},
                     {'username': 'hr', 'password': ''}):
            response = self.client.post(reverse('login_view'), body, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, body)
            self.assertEqual(response.data, {'error': 'Username and password are required'})
            self.assertNotIn('session', response.cookies)

    def test_invalid_credentials_are_indistinguishable(self):
        unknown = self.login('nobody', 'hr123')
        wrong = self.login('hr', 'wrong')
        self.assertEqual(unknown.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(wrong.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(unknown.data, wrong.data)
        self.assertEqual(unknown.data, {'error': 'Invalid credentials'})
        self.assertNotIn('session', unknown.cookies)
        self.assertNotIn('session', wrong.cookies)

    def test_role_in_body_is_ignored(self):
        response = self.client.post(reverse('login_view'),
                                    {'username': 'hr', 'password': 'hr123', 'role': 'SUPER_ADMIN'}, format='json')
        self.assertEqual(response.data['user']['role'], 'HR_ADMIN')

    def test_malformed_json_is_a_client_error(self):
        response = self.client.post(reverse('login_view'), '{not json', content_type='application/json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.json())

    def test_login_is_post_only(self):
        response = self.client.get(reverse('login_view'))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertIn('error', response.data)

    # -----------------------------------------------------------------
    # session
    # -----------------------------------------------------------------
    def test_session_returns_current_profile(self):
        self.login('inventory', 'inventory123')
        response = self.client.get(reverse('session_view'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['role'], 'INVENTORY_ADMIN')
        self.assertEqual(response.data['user']['allowedModules'], ['/inventory'])

    def test_session_without_cookie(self):
        response = self.client.get(reverse('session_view'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Not authenticated'})

    def test_session_with_garbage_cookie(self):
        self.client.cookies['session'] = 'garbage'
        response = self.client.get(reverse('session_view'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Invalid session'})

    def test_session_expired(self):
        self.client.cookies['session'] = self.cookie_for('hr', issued_at=now_ms() - EIGHT_HOURS_MS - 1000)
        response = self.client.get(reverse('session_view'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Session expired'})

    def test_concurrent_sessions_for_one_account(self):
        first, second = APIClient(), APIClient()
        self.login('hr', 'hr123', client=first)
        self.login('hr', 'hr123', client=second)
        first.post(reverse('logout_view'))
        self.assertEqual(first.get(reverse('session_view')).status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(second.get(reverse('session_view')).status_code, status.HTTP_200_OK)

    # -----------------------------------------------------------------
    # logout
    # -----------------------------------------------------------------
    def test_logout_is_idempotent(self):
        for _ in range(2):
            response = self.client.post(reverse('logout_view'))
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data, {'success': True})
            self.assertEqual(response.cookies['session']['max-age'], 0)

    def test_logout_with_garbage_cookie(self):
        self.client.cookies['session'] = 'garbage'
        response = self.client.post(reverse('logout_view'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies['session'].value, '')

    def test_logout_revokes_presented_session(self):
        token = self.login('hr', 'hr123').cookies['session'].value
        self.client.post(reverse('logout_view'))
        payload = self.conf.codec.decode(token)
        self.assertTrue(self.conf.revocations.is_revoked(payload.token_id))

    # -----------------------------------------------------------------
    # pages
    # -----------------------------------------------------------------
    def test_root_redirects_to_role_home(self):
        self.login('hr', 'hr123')
        response = self.client.get('/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/hr')

        superadmin = APIClient()
        self.login('superadmin', 'super123', client=superadmin)
        self.assertEqual(superadmin.get('/')['Location'], '/dashboard')

    def test_dashboard_lists_reachable_modules(self):
        self.login('superadmin', 'super123')
        response = self.client.get(reverse('dashboard'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['modules'], ['finance', 'hr', 'inventory', 'reception'])

    def test_unauthorized_page_explains_and_links_home(self):
        self.login('reception', 'reception123')
        response = self.client.get('/unauthorized')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        body = response.json()
        self.assertEqual(body['user']['role'], 'RECEPTION_ADMIN')
        self.assertEqual(body['home'], '/reception')

    def test_login_page_only_returns_local_targets(self):
        self.assertEqual(self.client.get('/login', {'returnTo': '/hr/payroll'}).json()['returnTo'], '/hr/payroll')
        for target in ('https://evil.example', '//evil.example', '/\\evil.example', '/\t/evil.example',
                       '/\n/evil.example', '/\x7f', ''):
            self.assertEqual(self.client.get('/login', {'returnTo': target}).json()['returnTo'], '/', target)


@pytest.fixture
def login_limit(monkeypatch):
    cache.clear()
    monkeypatch.setattr(LoginRateThrottle, 'THROTTLE_RATES', {'login': '2/min'})
    yield
    cache.clear()


def test_throttled_login_gives_no_wait_time(login_limit):
    client = APIClient()
    for _ in range(2):
        response = client.post(reverse('login_view'), {'username': 'hr', 'password': 'wrong'}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = client.post(reverse('login_view'), {'username': 'hr', 'password': 'hr123'}, format='json')
    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.data == {'error': 'Too many attempts'}
    assert not response.has_header('Retry-After')
    assert 'session' not in response.cookies

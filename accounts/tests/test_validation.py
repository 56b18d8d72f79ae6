import pytest

from accounts.registry import load_accounts
from accounts.revocation import RevocationList
from accounts.tokens import SessionCodec
from accounts.validation import SESSION_LIFETIME_MS, SessionStatus, validate

from .conftest import EIGHT_HOURS_MS, SEED

NOW = 1_760_000_000_000


@pytest.fixture
def codec():
    return SessionCodec()


def payload_for(codec, registry, username, issued_at):
    return codec.decode(codec.encode(registry.get(username), issued_at=issued_at))


def test_lifetime_is_eight_hours():
    assert SESSION_LIFETIME_MS == EIGHT_HOURS_MS == 28_800_000


@pytest.mark.parametrize('age_ms,expected', [
    (0, SessionStatus.VALID),
    (EIGHT_HOURS_MS - 1, SessionStatus.VALID),
    (EIGHT_HOURS_MS, SessionStatus.VALID),
    (EIGHT_HOURS_MS + 1, SessionStatus.EXPIRED),
    (EIGHT_HOURS_MS * 3, SessionStatus.EXPIRED),
])
def test_expiry_boundary(codec, registry, age_ms, expected):
    payload = payload_for(codec, registry, 'hr', NOW - age_ms)
    assert validate(payload, registry, now=NOW) is expected


def test_unknown_when_account_removed(codec, registry):
    payload = payload_for(codec, registry, 'hr', NOW)
    smaller = load_accounts([e for e in SEED if e['username'] != 'hr'])
    assert validate(payload, smaller, now=NOW) is SessionStatus.UNKNOWN


def test_unknown_when_role_changed(codec, registry):
    payload = payload_for(codec, registry, 'hr', NOW)
    promoted = load_accounts([dict(e, role='SUPER_ADMIN') if e['username'] == 'hr' else e for e in SEED])
    assert validate(payload, promoted, now=NOW) is SessionStatus.UNKNOWN


def test_unknown_when_account_id_changed(codec, registry):
    payload = payload_for(codec, registry, 'hr', NOW)
    reissued = load_accounts([dict(e, id='33') if e['username'] == 'hr' else e for e in SEED])
    assert validate(payload, reissued, now=NOW) is SessionStatus.UNKNOWN


def test_expiry_checked_before_account(codec, registry):
    payload = payload_for(codec, registry, 'hr', NOW - EIGHT_HOURS_MS - 1)
    assert validate(payload, load_accounts([]), now=NOW) is SessionStatus.EXPIRED


def test_defaults_to_wall_clock(codec, registry):
    payload = codec.decode(codec.encode(registry.get('hr')))
    assert validate(payload, registry) is SessionStatus.VALID


def test_revoked_session(codec, registry):
    revocations = RevocationList(max_age_seconds=EIGHT_HOURS_MS // 1000)
    payload = payload_for(codec, registry, 'finance', NOW)
    other = payload_for(codec, registry, 'finance', NOW)

    assert revocations.revoke(payload, now=NOW) is True
    assert validate(payload, registry, now=NOW, revocations=revocations) is SessionStatus.REVOKED
    # other sessions of the same account stay valid
    assert validate(other, registry, now=NOW, revocations=revocations) is SessionStatus.VALID
    assert validate(payload, registry, now=NOW) is SessionStatus.VALID


def test_revoking_an_expired_session_is_a_no_op(codec, registry):
    revocations = RevocationList(max_age_seconds=EIGHT_HOURS_MS // 1000)
    payload = payload_for(codec, registry, 'finance', NOW - EIGHT_HOURS_MS)
    assert revocations.revoke(payload, now=NOW) is False
    assert not revocations.is_revoked(payload.token_id)


def test_unreachable_cache_counts_as_revoked(codec, registry, cache_down):
    revocations = RevocationList(max_age_seconds=EIGHT_HOURS_MS // 1000)
    payload = payload_for(codec, registry, 'finance', NOW)
    assert revocations.is_revoked(payload.token_id) is True
    assert validate(payload, registry, now=NOW, revocations=revocations) is SessionStatus.REVOKED
    assert revocations.revoke(payload, now=NOW) is False

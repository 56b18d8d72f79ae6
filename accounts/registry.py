"""
Static administrative accounts.

Accounts are loaded once at startup (see ``AccountsConfig.ready``) from a
JSON file or a list of mappings and are never modified afterwards.  Seed
entries may carry a plaintext ``password`` which is hashed on load; real
deployments should ship ``password_hash`` values produced by
``manage.py hash_password`` instead.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from django.contrib.auth.hashers import check_password, make_password
from django.utils.crypto import get_random_string

from .exceptions import AccountConfigurationError, InvalidCredentials
from .policy import AccessPolicy, Role

USERNAME_RE = re.compile(r"^[a-z0-9_.-]{1,64}$")
ACCOUNT_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

REQUIRED_FIELDS = ("id", "username", "name", "email", "role")


def normalize_username(username) -> str:
    return str(username or "").strip().lower()


@dataclass(frozen=True)
class Account:
    id: str
    username: str
    name: str
    email: str
    role: Role

    def profile(self, policy: AccessPolicy) -> dict[str, Any]:
        """Public representation returned by the auth endpoints."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "allowedModules": list(policy.prefixes_for(self.role)),
        }


class AccountRegistry:
    """Read-only username -> (account, password hash) lookup."""

    def __init__(self, entries: Iterable[tuple[Account, str]] = ()):
        self._accounts: dict[str, Account] = {}
        self._hashes: dict[str, str] = {}
        for account, password_hash in entries:
            if account.username in self._accounts:
                raise AccountConfigurationError(f"duplicate username: {account.username}")
            self._accounts[account.username] = account
            self._hashes[account.username] = password_hash
        # Compared against for unknown usernames so both failures cost one hash check.
        self._dummy_hash = make_password(get_random_string(32))

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self):
        return iter(self._accounts.values())

    def get(self, username) -> Account | None:
        return self._accounts.get(normalize_username(username))

    def authenticate(self, username, password) -> Account:
        key = normalize_username(username)
        account = self._accounts.get(key)
        password_hash = self._hashes.get(key, self._dummy_hash)
        matches = check_password(password or "", password_hash)
        if account is None or not matches:
            raise InvalidCredentials()
        return account


def _build_entry(raw: Mapping[str, Any]) -> tuple[Account, str]:
    missing = [f for f in REQUIRED_FIELDS if not raw.get(f)]
    if missing:
        raise AccountConfigurationError(f"account entry missing {', '.join(missing)}")
    role = Role.parse(raw["role"])
    if role is None:
        raise AccountConfigurationError(f"unknown role: {raw['role']}")
    username = normalize_username(raw["username"])
    if not USERNAME_RE.fullmatch(username):
        raise AccountConfigurationError(f"invalid username: {raw['username']!r}")
    account_id = str(raw["id"])
    if not ACCOUNT_ID_RE.fullmatch(account_id):
        raise AccountConfigurationError(f"invalid account id: {account_id!r}")

    if raw.get("password_hash"):
        password_hash = raw["password_hash"]
    elif raw.get("password"):
        password_hash = make_password(raw["password"])
    else:
        raise AccountConfigurationError(f"account {username} has no password or password_hash")

    account = Account(
        id=account_id,
        username=username,
        name=str(raw["name"]),
        email=str(raw["email"]),
        role=role,
    )
    return account, password_hash


def load_accounts(source) -> AccountRegistry:
    """Build an :class:`AccountRegistry` from a JSON file path or a list of mappings."""
    if isinstance(source, (str, Path)):
        try:
            with open(source, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise AccountConfigurationError(f"cannot read accounts from {source}: {exc}") from exc
    else:
        data = source
    if isinstance(data, Mapping):
        data = data.get("accounts", [])
    if not isinstance(data, list):
        raise AccountConfigurationError("accounts must be a list")
    return AccountRegistry(_build_entry(item) for item in data)

"""
Role based module access.

A role maps to a list of path prefixes.  The super role carries the
wildcard ``*`` and may reach every path; any other role may reach a path
only when it starts with one of its prefixes.  This table is the single
source of truth for the gate, the auth endpoints, the DRF permission
classes and the management commands.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping

WILDCARD = "*"


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    FINANCE_ADMIN = "FINANCE_ADMIN"
    HR_ADMIN = "HR_ADMIN"
    INVENTORY_ADMIN = "INVENTORY_ADMIN"
    RECEPTION_ADMIN = "RECEPTION_ADMIN"

    @classmethod
    def parse(cls, value) -> "Role | None":
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_ROLE_MODULES: dict[str, list[str]] = {
    Role.SUPER_ADMIN.value: [WILDCARD],
    Role.FINANCE_ADMIN.value: ["/finance"],
    Role.HR_ADMIN.value: ["/hr"],
    Role.INVENTORY_ADMIN.value: ["/inventory"],
    Role.RECEPTION_ADMIN.value: ["/reception"],
}

SUPER_HOME = "/dashboard"


class AccessPolicy:
    """Decides whether a role may reach a request path."""

    def __init__(
        self,
        role_modules: Mapping[str, Iterable[str]] | None = None,
        always_allowed: Iterable[str] = ("/", "/login", "/unauthorized"),
    ):
        table = DEFAULT_ROLE_MODULES if role_modules is None else role_modules
        self._modules: dict[str, tuple[str, ...]] = {}
        for role, prefixes in table.items():
            key = role.value if isinstance(role, Role) else str(role)
            self._modules[key] = tuple(prefixes)
        self.always_allowed = frozenset(always_allowed)

    def prefixes_for(self, role) -> tuple[str, ...]:
        key = role.value if isinstance(role, Role) else role
        return self._modules.get(key, ())

    def is_super(self, role) -> bool:
        return WILDCARD in self.prefixes_for(role)

    def is_authorized(self, role, path: str) -> bool:
        if self.is_super(role):
            return True
        if path in self.always_allowed:
            return True
        return any(path.startswith(prefix) for prefix in self.prefixes_for(role))

    def home_for(self, role) -> str:
        """Landing path after login: the first module the role may open."""
        if self.is_super(role):
            return SUPER_HOME
        prefixes = self.prefixes_for(role)
        return prefixes[0] if prefixes else "/unauthorized"

    def roles(self) -> list[str]:
        return list(self._modules)

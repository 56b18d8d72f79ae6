from __future__ import annotations

import logging

from django.apps import AppConfig, apps

logger = logging.getLogger("accounts")


class AccountsConfig(AppConfig):
    """Loads the account registry and gate collaborators once at startup."""

    name = "accounts"
    verbose_name = "Accounts & session gate"

    registry = None
    policy = None
    codec = None
    revocations = None

    def ready(self) -> None:
        self.configure()

    def configure(self) -> None:
        from .conf import gate_setting
        from .policy import AccessPolicy
        from .registry import load_accounts
        from .revocation import RevocationList
        from .tokens import SessionCodec

        self.policy = AccessPolicy(
            gate_setting("ROLE_MODULES"),
            always_allowed=("/", gate_setting("LOGIN_URL"), gate_setting("UNAUTHORIZED_URL")),
        )
        source = gate_setting("ACCOUNTS_FILE")
        self.registry = registry = load_accounts(source if source is not None else [])
        self.codec = SessionCodec(salt=gate_setting("SALT"))
        self.revocations = RevocationList(gate_setting("MAX_AGE")) if gate_setting("REVOCATION") else None
        logger.info("session gate ready: %d accounts, revocation %s",
                    len(registry), "on" if self.revocations else "off")


def gate() -> AccountsConfig:
    return apps.get_app_config("accounts")  # type: ignore[return-value]

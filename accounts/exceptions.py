"""
Authentication errors.

Every failure of the session gate and the auth endpoints is one of the
``AuthError`` subclasses below.  They are caught where they are raised
(gate, endpoints) and turned into a redirect or a JSON error.  The DRF
exception handler for anything else raised inside an API view lives in
:mod:`accounts.handlers`.
"""
from __future__ import annotations


class AuthError(Exception):
    """Base class for authentication and authorization failures."""

    message = "Authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class MissingCredentials(AuthError):
    message = "Username and password are required"


class InvalidCredentials(AuthError):
    """Unknown username or wrong password; the two are never told apart."""

    message = "Invalid credentials"


class MalformedSession(AuthError):
    message = "Invalid session"


class DecodeFailure(MalformedSession):
    """Raised by the session codec for any undecodable cookie value."""


class ExpiredSession(AuthError):
    message = "Session expired"


class UnknownAccount(AuthError):
    message = "Invalid session"


class AccountConfigurationError(Exception):
    """The static account configuration could not be loaded."""

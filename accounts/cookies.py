"""Setting and clearing the ``session`` cookie."""
from __future__ import annotations

from .conf import gate_setting


def set_session_cookie(response, token: str) -> None:
    response.set_cookie(
        gate_setting("COOKIE_NAME"),
        token,
        max_age=gate_setting("MAX_AGE"),
        path="/",
        secure=gate_setting("COOKIE_SECURE"),
        httponly=True,
        samesite=gate_setting("COOKIE_SAMESITE"),
    )


def clear_session_cookie(response) -> None:
    # delete_cookie sends an empty value with Max-Age=0
    response.delete_cookie(
        gate_setting("COOKIE_NAME"),
        path="/",
        samesite=gate_setting("COOKIE_SAMESITE"),
    )


def session_cookie(request) -> str | None:
    value = request.COOKIES.get(gate_setting("COOKIE_NAME"))
    return value or None

"""Server-side access to the authenticated user's session."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import current_app, request
from flask_jwt_extended import get_jwt, get_jwt_identity, get_jwt_request_location, verify_jwt_in_request
from flask_jwt_extended.exceptions import CSRFError, JWTExtendedException
from jwt.exceptions import PyJWTError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class UserSession:
    """Identity of the signed-in user as attested by the session token."""

    user_id: str
    username: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    access_token: str | None = None
    csrf_token: str | None = None


def load_session() -> UserSession | None:
    """Return the current request's session or ``None`` when unauthenticated.

    A cookie-authenticated write without a matching CSRF value raises
    :class:`~flask_jwt_extended.exceptions.CSRFError`.
    """

    try:
        verify_jwt_in_request(optional=True)
    except CSRFError:
        raise
    except (JWTExtendedException, PyJWTError) as exc:
        LOGGER.debug("Rejecting session token: %s", exc)
        return None

    identity = get_jwt_identity()
    if identity is None:
        return None

    claims = get_jwt()
    return UserSession(
        user_id=str(identity),
        username=claims.get("username") or None,
        name=claims.get("name"),
        avatar_url=claims.get("avatar_url"),
        access_token=_raw_token(get_jwt_request_location()),
        csrf_token=claims.get("csrf"),
    )


def _raw_token(location: str | None) -> str | None:
    # Forward the same token the identity was read from.
    if location == "headers":
        header_name = current_app.config.get("JWT_HEADER_NAME", "Authorization")
        header_type = current_app.config.get("JWT_HEADER_TYPE", "Bearer")
        header = request.headers.get(header_name, "")
        if not header_type:
            return header.strip() or None
        scheme, _, token = header.partition(" ")
        if scheme.lower() == header_type.lower() and token:
            return token.strip()
        return None
    if location == "cookies":
        cookie_name = current_app.config.get("JWT_ACCESS_COOKIE_NAME", "access_token_cookie")
        return request.cookies.get(cookie_name)
    return None

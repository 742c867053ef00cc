"""Signed session tokens for the verified_session authentication strategy.

A token carries the actor id in ``sub`` and, optionally, the tenant the
session was opened for in ``tenant_id``. Signing key and algorithm come
from settings.
"""

from dataclasses import dataclass
from datetime import timedelta

from jose import JWTError, jwt

from tenantguard.core.config import get_settings
from tenantguard.shared.utils.datetime import utc_now


class InvalidSessionToken(ValueError):
    """Token is malformed, badly signed, expired or has no subject."""


@dataclass(frozen=True)
class SessionClaims:
    actor_id: str
    tenant_id: str | None


def issue_session_token(
    actor_id: str, tenant_id: str | None = None, ttl: timedelta | None = None
) -> str:
    settings = get_settings()
    claims: dict[str, object] = {
        "sub": actor_id,
        "exp": utc_now() + (ttl or timedelta(minutes=settings.access_token_expire_minutes)),
    }
    if tenant_id:
        claims["tenant_id"] = tenant_id
    return jwt.encode(
        claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def read_session_token(token: str) -> SessionClaims:
    """Verify signature and expiry and return the session claims.

    Raises:
        InvalidSessionToken: on any verification failure.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise InvalidSessionToken(str(e)) from e
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise InvalidSessionToken("token has no subject")
    tenant_id = payload.get("tenant_id")
    return SessionClaims(
        actor_id=subject.strip(),
        tenant_id=tenant_id if isinstance(tenant_id, str) else None,
    )

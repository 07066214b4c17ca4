"""Bearer token handling. The acting user is the token's sub claim.

Tokens are issued by the identity service that fronts the registry; this module
only needs to mint them for tooling and tests and to read the subject back.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from docroute.core.config import get_settings
from docroute.shared.utils import utc_now


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    claims: dict[str, Any] | None = None,
) -> str:
    """Sign an access token whose sub is user_id.

    expires_delta defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload: dict[str, Any] = {**(claims or {}), "sub": user_id, "exp": utc_now() + ttl}
    encoded = jwt.encode(
        payload,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> str:
    """Decode token and return its subject (user id).

    Raises:
        ValueError: token is malformed, expired, signed with another key or has no sub.
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
        raise ValueError(f"Invalid token: {e!s}") from e
    subject = payload.get("sub")
    if not subject:
        raise ValueError("Token has an empty sub claim")
    return str(subject)

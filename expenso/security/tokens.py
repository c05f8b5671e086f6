from datetime import datetime, timedelta, timezone
from typing import Any, Dict, NamedTuple, Optional

import jwt


class TokenIdentity(NamedTuple):
    user_id: int
    email: str


class TokenError(Exception):
    """Raised by verify_token for any token that must not be trusted."""


def issue_token(
    *,
    secret: str,
    user_id: int,
    email: str,
    expires_minutes: int,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    if not secret:
        raise ValueError("jwt secret is blank")

    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=int(expires_minutes))

    payload: Dict[str, Any] = {
        "userId": int(user_id),
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(*, token: str, secret: str, algorithm: str = "HS256") -> TokenIdentity:
    """Check signature and expiry and return the identity the token carries.

    Purely cryptographic: the user table is never consulted, so a token for
    a since-deleted user keeps verifying until it expires.
    """
    if not token:
        raise TokenError("token is blank")
    if not secret:
        raise ValueError("jwt secret is blank")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError(f"token invalid: {exc}") from exc

    user_id = payload.get("userId")
    email = payload.get("email")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
        raise TokenError("token is missing identity claims")

    return TokenIdentity(user_id=user_id, email=email)

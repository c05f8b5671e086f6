"""Bearer-token authentication for protected routes.

Every protected request runs through ``AUTH_PIPELINE`` before its handler:

1. ``extract_bearer_token`` - no usable ``Authorization: Bearer`` header
   short-circuits with 401.
2. ``verify_bearer_token`` - a token that fails signature/expiry/claim checks
   short-circuits with 403.

A request that clears every stage carries a :class:`CurrentUserSchema`
downstream. Nothing here opens a database session, so a rejected request
never reaches the database.
"""

from typing import Callable, Optional, Sequence

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from expenso.config import Settings
from expenso.errors import InvalidCredential, MissingCredential
from expenso.security.tokens import TokenError, issue_token, verify_token
from expenso.users.schemas import CurrentUserSchema

_bearer = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def create_access_token(settings: Settings, user_id: int, email: str) -> str:
    return issue_token(
        secret=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        user_id=user_id,
        email=email,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


# ================= PIPELINE STAGES =================
def extract_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials], settings: Settings
) -> str:
    if credentials is None or not credentials.credentials:
        raise MissingCredential()
    return credentials.credentials


def verify_bearer_token(token: str, settings: Settings) -> CurrentUserSchema:
    try:
        identity = verify_token(
            token=token,
            secret=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
    except TokenError as exc:
        logger.warning(f"Rejected bearer token: {exc}")
        raise InvalidCredential()
    return CurrentUserSchema(id=identity.user_id, email=identity.email)


Stage = Callable[[object, Settings], object]

AUTH_PIPELINE: Sequence[Stage] = (
    extract_bearer_token,
    verify_bearer_token,
)


def run_pipeline(
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: Settings,
    stages: Sequence[Stage] = AUTH_PIPELINE,
) -> CurrentUserSchema:
    value: object = credentials
    for stage in stages:
        value = stage(value, settings)
    return value


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUserSchema:
    return run_pipeline(credentials, settings)

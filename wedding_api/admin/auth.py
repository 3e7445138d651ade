"""Bearer-token authentication for the admin API."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wedding_api.config.settings import Settings, settings
from wedding_api.errors import UnauthorizedError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("id", "email", "role")

# auto_error=False so a missing header is reported with our own 401 message
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AdminPrincipal:
    id: str
    email: str
    role: str


def create_admin_token(
    admin_id: str,
    email: str,
    role: str = "admin",
    config: Settings = settings,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=config.access_token_expire_minutes)
    )
    payload = {"id": admin_id, "email": email, "role": role, "exp": expire}
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_admin_token(token: str, config: Settings = settings) -> AdminPrincipal:
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except jwt.PyJWTError as e:
        logger.info("Rejected admin token: %s", e)
        raise UnauthorizedError("Unauthorized: Invalid token") from e

    if not all(payload.get(claim) for claim in REQUIRED_CLAIMS):
        raise UnauthorizedError("Unauthorized: Invalid token payload")
    return AdminPrincipal(id=str(payload["id"]), email=payload["email"], role=payload["role"])


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminPrincipal:
    """Dependency guarding every admin route."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized: No token provided")
    return decode_admin_token(credentials.credentials)

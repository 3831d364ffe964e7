"""
Authentication Utility - JWT verification and role guards.

Provides:
- JWT token creation/verification
- FastAPI dependencies that turn a bearer token into caller context
- Role guards for each dashboard

Requests are rejected here, before any aggregation runs:
- no or bad token, unknown user  -> 401
- non-numeric user id in token   -> 400
- wrong role                     -> 403
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.api.deps import get_repository
from app.core.config import get_settings
from app.models.entities import UserRole
from app.repositories.base import PlacementRepository

# Bearer token extractor (we raise our own 401 when it is missing)
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def parse_user_id(raw) -> int:
    """Strict integer id parsing; anything else is a 400."""
    if isinstance(raw, bool):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw.strip())
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repository: PlacementRepository = Depends(get_repository),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    sub = payload.get("sub")
    if sub is None:
        raise credentials_exception

    user_id = parse_user_id(sub)

    # Verify user exists
    user = repository.get_user(user_id)
    if not user:
        raise credentials_exception

    return {"user_id": user.id, "name": user.name, "role": user.role.value}


def _require_role(user: dict, *roles: UserRole) -> dict:
    if user["role"] not in {r.value for r in roles}:
        allowed = " or ".join(r.value for r in roles)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Requires {allowed} role")
    return user


async def get_current_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require admin role."""
    return _require_role(user, UserRole.admin)


async def get_current_coordinator(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require coordinator role (admins may view coordinator analytics too)."""
    return _require_role(user, UserRole.coordinator, UserRole.admin)


async def get_current_supervisor(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require supervisor role."""
    return _require_role(user, UserRole.supervisor)


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role."""
    return _require_role(user, UserRole.student)

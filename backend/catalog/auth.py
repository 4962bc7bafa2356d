"""
Bearer-token authentication for the item API.

Reads are anonymous. Mutations need a JWT signed with CATALOG_AUTH_SECRET
whose "roles" claim contains the admin role.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import jwt
from dotenv import load_dotenv
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

load_dotenv()

AUTH_SECRET = os.getenv("CATALOG_AUTH_SECRET", "catalog-dev-secret-change-me-in-production")
AUTH_ISSUER = os.getenv("CATALOG_AUTH_ISSUER", "catalog-identity")
AUTH_AUDIENCE = os.getenv("CATALOG_AUTH_AUDIENCE", "catalog-item-api")
ADMIN_ROLE = os.getenv("CATALOG_ADMIN_ROLE", "Admin")


@dataclass
class AuthUser:
    subject: str
    roles: List[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


security = HTTPBearer(auto_error=False)


def issue_token(subject: str, roles: Optional[List[str]] = None, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Mint a token the item API accepts (service-to-service and local use)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "roles": roles or [],
        "exp": now + expires_in,
        "iat": now,
        "iss": AUTH_ISSUER,
        "aud": AUTH_AUDIENCE,
    }
    return jwt.encode(payload, AUTH_SECRET, algorithm="HS256")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Decode the bearer token into an AuthUser.

    Raises:
        HTTPException 401 if the token is missing, invalid, expired or lacks a subject
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        claims = jwt.decode(
            credentials.credentials,
            AUTH_SECRET,
            algorithms=["HS256"],
            audience=AUTH_AUDIENCE,
            issuer=AUTH_ISSUER,
            options={"require": ["exp", "iat", "aud", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired")
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {str(e)}")

    roles = claims.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return AuthUser(subject=claims["sub"], roles=list(roles))


def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"{ADMIN_ROLE} role required")
    return user

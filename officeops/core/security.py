"""Bearer token verification.

Tokens are issued by the portal's identity service; this API only verifies
them and reads the acting user's id and role from the claims.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from fastapi import HTTPException, Request

from officeops.core import config

ACCESS_TOKEN_COOKIE = "access_token"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=8)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token signed with the shared secret.

    Mirrors what the identity service issues; used by tooling and tests.
    """
    to_encode = data.copy()
    if "sub" in to_encode:
        # PyJWT requires a string subject
        to_encode["sub"] = str(to_encode["sub"])
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    to_encode.update({"exp": expire})

    if config.settings.JWT_ISSUER:
        to_encode.setdefault("iss", config.settings.JWT_ISSUER)
    if config.settings.JWT_AUDIENCE:
        to_encode.setdefault("aud", config.settings.JWT_AUDIENCE)

    return jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)


def _extract_token(request: Request) -> Optional[str]:
    """Read the token from the Authorization header, falling back to the cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


def decode_access_token(token: str) -> dict:
    """Decode and verify a token, raising HTTP 401 on any failure."""
    options = {"require": ["exp", "sub"]}
    kwargs = {}
    if config.settings.JWT_ISSUER:
        kwargs["issuer"] = config.settings.JWT_ISSUER
    if config.settings.JWT_AUDIENCE:
        kwargs["audience"] = config.settings.JWT_AUDIENCE
    else:
        options["verify_aud"] = False

    try:
        return jwt.decode(
            token,
            config.settings.SECRET_KEY,
            algorithms=[config.settings.ALGORITHM],
            options=options,
            **kwargs,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")


def get_current_user(request: Request) -> dict:
    """Verify the bearer token and return the acting user as ``{"id", "role"}``."""
    token = _extract_token(request)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = decode_access_token(token)

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token subject")

    role = payload.get("role")
    return {
        "id": user_id,
        "role": int(role) if role is not None else None,
    }


def is_approver(user: dict) -> bool:
    """Whether the user's role may approve/decline meetings and purge trash."""
    return user.get("role") in config.settings.APPROVER_ROLES


def verify_approver(request: Request) -> dict:
    """Like get_current_user, but also require an approver role (HTTP 403 otherwise)."""
    user = get_current_user(request)
    if user["role"] is None:
        raise HTTPException(status_code=403, detail="Role information missing")
    if not is_approver(user):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return user

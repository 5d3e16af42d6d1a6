"""
Password hashing and access tokens.

Passwords are only ever hashed or verified against a stored hash; neither the
plaintext nor the token is logged.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt
from passlib.context import CryptContext

from carbon_tracker.utils.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id: UUID, auth_config: dict[str, Any]) -> tuple[str, int]:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Token subject
        auth_config: The [auth] config section

    Returns:
        (encoded token, lifetime in seconds)
    """
    expires_in = int(auth_config.get("access_token_expire_minutes", 60)) * 60
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    token = jwt.encode(
        payload,
        auth_config["secret_key"],
        algorithm=auth_config.get("algorithm", "HS256"),
    )
    return token, expires_in


def decode_access_token(token: str, auth_config: dict[str, Any]) -> UUID:
    """
    Verify a token's signature and expiry.

    Returns:
        The user id carried in the token

    Raises:
        AuthenticationFailed: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(
            token,
            auth_config["secret_key"],
            algorithms=[auth_config.get("algorithm", "HS256")],
        )
        return UUID(payload["sub"])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise AuthenticationFailed("Token has expired")
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.info(f"Rejected invalid access token: {type(e).__name__}")
        raise AuthenticationFailed("Invalid token")

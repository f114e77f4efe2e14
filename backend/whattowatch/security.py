"""Password hashing and access tokens."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from cryptography.hazmat.primitives import constant_time, hashes, hmac


@dataclass(frozen=True)
class Identity:
    """Acting user resolved from an access token."""

    id: str
    email: str


class InvalidTokenError(Exception):
    """Access token is malformed, expired, or signed with another key."""

    pass


def hash_password(password: str, salt: str) -> str:
    """HMAC-SHA256 of the password keyed with the configured salt, hex encoded."""
    digest = hmac.HMAC(salt.encode("utf-8"), hashes.SHA256())
    digest.update(password.encode("utf-8"))
    return digest.finalize().hex()


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    return constant_time.bytes_eq(
        hash_password(password, salt).encode("utf-8"),
        password_hash.encode("utf-8"),
    )


class TokenService:
    """Issues and verifies signed JWT access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def create_token(self, identity: Identity, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": identity.id,
            "email": identity.email,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Identity:
        """Return the identity carried by ``token`` or raise InvalidTokenError."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        email = payload.get("email")
        if not isinstance(email, str):
            raise InvalidTokenError("Token has no email claim")
        return Identity(id=str(payload["sub"]), email=email)

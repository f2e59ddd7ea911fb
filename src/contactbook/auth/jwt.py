"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
Issuer and verifier are the same process, so a symmetric HS256
signature is enough. The token carries the user's email as ``sub``
plus ``iat``/``exp``; nothing is stored server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from contactbook.config import Settings


class TokenError(Exception):
    """Raised when token verification fails."""


class TokenExpired(TokenError):
    """The token's ``exp`` is in the past."""


class InvalidToken(TokenError):
    """Bad signature, malformed token, or missing subject."""


class TokenService:
    """Issues and verifies access tokens bound to a subject (email)."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        default_ttl_minutes: int = 30,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.default_ttl_minutes = default_ttl_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            default_ttl_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, subject: str, ttl_minutes: Optional[int] = None) -> str:
        """Create a signed access token for ``subject``.

        A ttl of 0 (or negative) yields a token that is already expired.
        """
        if ttl_minutes is None:
            ttl_minutes = self.default_ttl_minutes
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(minutes=ttl_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return its subject.

        Raises TokenExpired or InvalidToken on failure.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("Invalid token payload")
        return subject

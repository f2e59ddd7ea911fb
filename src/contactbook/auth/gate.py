"""Auth gate — bearer token check run before protected handlers.

Learn: The gate itself is plain Python: ``AuthGate.check()`` takes the
raw Authorization header and returns a tagged result, either
``Allow(email)`` or ``Deny(reason)``. It never raises and knows nothing
about HTTP. ``require_user`` is the FastAPI dependency that invokes the
gate before dispatch and turns a Deny into a 401.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

import structlog
from fastapi import Depends, Header, HTTPException, Request

from contactbook.auth.jwt import InvalidToken, TokenExpired, TokenService
from contactbook.auth.store import CredentialStore
from contactbook.dependencies import get_credential_store, get_token_service

logger = structlog.get_logger()


class DenyReason(str, enum.Enum):
    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"
    TOKEN_EXPIRED = "token_expired"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN_USER = "unknown_user"


DENY_MESSAGES = {
    DenyReason.MISSING_HEADER: "Missing Authorization header",
    DenyReason.MALFORMED_HEADER: "Invalid Authorization header",
    DenyReason.TOKEN_EXPIRED: "Token expired",
    DenyReason.INVALID_TOKEN: "Invalid token",
    DenyReason.UNKNOWN_USER: "User not found",
}


@dataclass(frozen=True)
class Allow:
    email: str


@dataclass(frozen=True)
class Deny:
    reason: DenyReason

    @property
    def message(self) -> str:
        return DENY_MESSAGES[self.reason]


AuthDecision = Union[Allow, Deny]


class AuthGate:
    """Verifies a bearer header against the token service and credential store."""

    def __init__(self, tokens: TokenService, credentials: CredentialStore):
        self.tokens = tokens
        self.credentials = credentials

    def check(self, authorization: Optional[str]) -> AuthDecision:
        if not authorization:
            return Deny(DenyReason.MISSING_HEADER)

        scheme, _, token = authorization.partition(" ")
        if scheme != "Bearer" or not token:
            return Deny(DenyReason.MALFORMED_HEADER)

        try:
            email = self.tokens.verify(token)
        except TokenExpired:
            return Deny(DenyReason.TOKEN_EXPIRED)
        except InvalidToken:
            return Deny(DenyReason.INVALID_TOKEN)

        # The user may have existed when the token was issued but not anymore
        if email not in self.credentials:
            return Deny(DenyReason.UNKNOWN_USER)

        return Allow(email)


def get_auth_gate(
    tokens: TokenService = Depends(get_token_service),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AuthGate:
    return AuthGate(tokens, credentials)


async def require_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    gate: AuthGate = Depends(get_auth_gate),
) -> str:
    """FastAPI dependency — returns the authenticated email or raises 401.

    Learn: On success the email is attached to request.state and bound
    into structlog's context so downstream log lines carry it.
    """
    decision = gate.check(authorization)
    if isinstance(decision, Deny):
        logger.info("auth.denied", reason=decision.reason.value, path=request.url.path)
        raise HTTPException(
            status_code=401,
            detail=decision.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.user_email = decision.email
    structlog.contextvars.bind_contextvars(user_email=decision.email)
    return decision.email

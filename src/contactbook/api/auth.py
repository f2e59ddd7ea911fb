"""Auth API — signup, login, and a protected sample route.

Learn: Routes for the user auth flow:
- POST /signup → hash the password, store email → digest
- POST /login → email/password → JWT access token
- GET /protected → requires a valid bearer token

Error bodies use FastAPI's ``{"detail": ...}`` shape. Required fields
are checked by hand so that a missing field answers 400 (not 422).
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from contactbook.auth.gate import require_user
from contactbook.auth.jwt import TokenService
from contactbook.auth.password import hash_password, verify_password
from contactbook.auth.store import CredentialStore
from contactbook.dependencies import get_credential_store, get_token_service

logger = structlog.get_logger()

router = APIRouter()


# ─── Schemas ─────────────────────────────────────────────


class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SignupResponse(BaseModel):
    msg: str


class TokenResponse(BaseModel):
    token: str


def _require_credentials(body: Credentials) -> tuple[str, str]:
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="email and password are required")
    return body.email, body.password


# ─── Signup ──────────────────────────────────────────────


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
):
    """Create a user account in the in-memory credential store."""
    email, password = _require_credentials(body)

    if email in credentials:
        logger.info("auth.signup_duplicate", email=email)
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        digest = hash_password(password)
    except Exception:
        logger.exception("auth.signup_failed", email=email)
        raise HTTPException(status_code=500, detail="Internal server error")

    # A concurrent signup may have claimed the email while we were hashing
    if not credentials.add(email, digest):
        raise HTTPException(status_code=400, detail="User already exists")

    logger.info("auth.signup", email=email)
    return SignupResponse(msg="signup ok")


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=TokenResponse)
async def login(
    body: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → JWT access token."""
    email, password = _require_credentials(body)

    digest = credentials.get(email)
    if digest is None:
        raise HTTPException(status_code=401, detail="Invalid credentials-User")

    if not verify_password(password, digest):
        raise HTTPException(status_code=401, detail="Invalid credentials-Password")

    try:
        token = tokens.issue(email)
    except Exception:
        logger.exception("auth.login_failed", email=email)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info("auth.login", email=email)
    return TokenResponse(token=token)


# ─── Protected ───────────────────────────────────────────


@router.get("/protected")
async def protected(email: str = Depends(require_user)):
    """Sample route that only answers with a valid bearer token."""
    return {"msg": f"Hello {email}, this is protected data!"}

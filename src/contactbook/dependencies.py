"""FastAPI dependencies for process-wide resources.

Learn: The credential store, token service, and contact repository are
created once in the app lifespan and kept on ``app.state``. Handlers
receive them through these Depends() providers, which tests replace
with ``app.dependency_overrides``.
"""

from fastapi import Request

from contactbook.auth.jwt import TokenService
from contactbook.auth.store import CredentialStore
from contactbook.contacts.repository import ContactRepository


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_contact_repository(request: Request) -> ContactRepository:
    return request.app.state.contacts

"""Contacts API — list, get by name, add.

Learn: Reads are open; adding a contact requires a bearer token
(``require_user`` runs before the handler, so an unauthenticated
request never touches the body or the store).

Errors are raised as AppError subclasses and rendered by the app-wide
handler as ``{"message": ...}``. Anything unexpected is logged and
answered as a 500 with the underlying error text.
"""

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from contactbook.auth.gate import require_user
from contactbook.contacts.repository import ContactRepository
from contactbook.contacts.schemas import ContactCreate, ContactCreated
from contactbook.dependencies import get_contact_repository
from contactbook.errors import AppError, StoreError, ValidationError

logger = structlog.get_logger()

router = APIRouter(prefix="/contacts")


@router.get("")
async def list_contacts(repo: ContactRepository = Depends(get_contact_repository)):
    """Return up to 100 contacts."""
    try:
        return await repo.list_all()
    except AppError:
        raise
    except Exception as e:
        logger.exception("contacts.list_failed")
        raise StoreError(f"Failed to retrieve contacts: {e}")


@router.get("/{contact_name}")
async def get_contact(
    contact_name: str,
    repo: ContactRepository = Depends(get_contact_repository),
):
    """Return a single contact by its name."""
    if not contact_name.strip():
        raise ValidationError("Contact name is required")

    try:
        return await repo.get_by_name(contact_name)
    except AppError:
        raise
    except Exception as e:
        logger.exception("contacts.get_failed", contact_name=contact_name)
        raise StoreError(f"Failed to retrieve contact: {e}")


async def _read_contact(request: Request) -> ContactCreate:
    """Parse the POST body by hand.

    Learn: Declaring the body as a parameter would make FastAPI decode it
    before require_user runs, so a garbled body would beat a missing token
    to the response. Reading it here keeps auth first and lets a bad body
    answer 400 instead of 422.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Bad request: No data provided.")

    if not isinstance(payload, dict) or not payload:
        raise ValidationError("Bad request: No data provided.")
    if not payload.get("contact_name"):
        raise ValidationError("contact_name is required")

    try:
        return ContactCreate.model_validate(payload)
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ValidationError(f"Bad request: invalid fields: {fields}")


@router.post("", response_model=ContactCreated, status_code=201)
async def add_contact(
    request: Request,
    email: str = Depends(require_user),
    repo: ContactRepository = Depends(get_contact_repository),
):
    """Add a contact unless one with the same name already exists."""
    body = await _read_contact(request)

    logger.info("contacts.add", contact_name=body.contact_name, added_by=email)
    doc = body.model_dump()

    try:
        await repo.insert_if_absent(doc)
    except AppError:
        raise
    except Exception as e:
        logger.exception("contacts.add_failed", contact_name=body.contact_name)
        raise StoreError(f"Failed to add contact: {e}")

    return ContactCreated(message="Response: New contact added successfully")

"""Pydantic schemas for contacts."""

from typing import Optional

from pydantic import BaseModel


class ContactCreate(BaseModel):
    """Request body for POST /contacts.

    The handler reads the raw body and checks presence itself, then
    validates here; unknown keys are dropped, numbers become text.
    """

    contact_name: Optional[str] = None
    phone_number: Optional[str] = None
    message: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {"coerce_numbers_to_str": True}


class ContactCreated(BaseModel):
    message: str

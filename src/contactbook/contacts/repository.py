"""Contact repository — list, get-by-name, insert-if-absent.

Learn: Uniqueness of ``contact_name`` is enforced by a unique index,
not by a find_one() before insert_one(). A single insert either lands
or fails with DuplicateKeyError, so two concurrent POSTs with the same
name cannot both succeed.

The index is requested at startup, but Mongo may not be reachable then.
Writes therefore check that the index exists first and refuse to insert
until it does: an insert without the index would accept duplicates.

Driver errors are translated into StoreError here; the API layer only
sees the application error taxonomy.
"""

from typing import Any

import structlog
from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from contactbook.errors import ConflictError, NotFoundError, StoreError

logger = structlog.get_logger()

DEFAULT_LIST_LIMIT = 100
CONTACT_NAME_INDEX = "contact_name_unique"


def serialize(doc: dict[str, Any]) -> dict[str, Any]:
    """Copy a stored document into JSON-safe form (ObjectIds anywhere → str)."""
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})


class ContactRepository:
    """CRUD facade over the contacts collection."""

    def __init__(self, collection):
        self.collection = collection
        self._indexed = False

    async def ensure_indexes(self) -> None:
        """Create the unique index on contact_name (no-op if it exists)."""
        try:
            await self.collection.create_index(
                [("contact_name", ASCENDING)], unique=True, name=CONTACT_NAME_INDEX
            )
        except PyMongoError as e:
            raise StoreError(f"Failed to create indexes: {e}")
        self._indexed = True

    async def list_all(self, limit: int = DEFAULT_LIST_LIMIT) -> list[dict[str, Any]]:
        """Return up to ``limit`` contacts in store order."""
        try:
            docs = await self.collection.find({}).limit(limit).to_list()
        except PyMongoError as e:
            raise StoreError(f"Failed to retrieve contacts: {e}")
        return [serialize(d) for d in docs]

    async def get_by_name(self, name: str) -> dict[str, Any]:
        try:
            doc = await self.collection.find_one({"contact_name": name})
        except PyMongoError as e:
            raise StoreError(f"Failed to retrieve contact: {e}")
        if doc is None:
            raise NotFoundError("Contact not found")
        return serialize(doc)

    async def insert_if_absent(self, contact: dict[str, Any]) -> dict[str, Any]:
        """Insert ``contact`` unless its contact_name is taken.

        Raises ConflictError on a duplicate name, StoreError if the unique
        index cannot be put in place.
        """
        if not self._indexed:
            await self.ensure_indexes()

        doc = dict(contact)
        name = doc.get("contact_name")
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(f"Contact with name {name} already exists.")
        except PyMongoError as e:
            raise StoreError(f"Failed to add contact: {e}")

        doc["_id"] = result.inserted_id
        logger.info("contacts.inserted", contact_name=name, id=str(result.inserted_id))
        return serialize(doc)

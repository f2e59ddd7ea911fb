"""MongoDB client lifecycle.

Learn: One AsyncMongoClient per process. It is created in the app
lifespan, shared by every request (the driver pools connections
internally), and closed at shutdown. Nothing connects or disconnects
per request.
"""

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from contactbook.config import Settings


def create_client(settings: Settings) -> AsyncMongoClient:
    """Build the client. Connection is lazy; the first operation dials out."""
    return AsyncMongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        connectTimeoutMS=settings.mongo_timeout_ms,
    )


def get_collection(client: AsyncMongoClient, settings: Settings) -> AsyncCollection:
    return client[settings.db_name][settings.collection]


async def ping(client: AsyncMongoClient) -> None:
    """Round-trip to the server. Raises PyMongoError if unreachable."""
    await client.admin.command("ping")

"""Test fixtures — fresh stores per test, no MongoDB required.

Learn: Testing pattern for FastAPI + dependency injection:

1. Each test gets its own CredentialStore, TokenService and an in-memory
   contacts collection, wired in via app.dependency_overrides.
2. The in-memory collection mimics the slice of the async pymongo API the
   repository uses. Like MongoDB, it only rejects duplicate contact_name
   values once the unique index has been created, and it can be told to
   fail index creation the way an unreachable server would.
3. httpx's ASGITransport does not run the lifespan, so nothing tries to
   reach a real Mongo server.
"""

import copy

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError
from pymongo.results import InsertOneResult

from contactbook.auth.jwt import TokenService
from contactbook.auth.store import CredentialStore
from contactbook.contacts.repository import ContactRepository
from contactbook.dependencies import (
    get_contact_repository,
    get_credential_store,
    get_token_service,
)
from contactbook.main import app

TEST_SECRET = "test-secret-key-with-enough-bytes-for-hs256"


class InMemoryCursor:
    def __init__(self, docs):
        self._docs = docs
        self._limit = None

    def limit(self, n):
        self._limit = n
        return self

    async def to_list(self, length=None):
        docs = self._docs if self._limit is None else self._docs[: self._limit]
        return [copy.deepcopy(d) for d in docs]


class InMemoryCollection:
    """Async collection test double.

    ``index_failures`` makes the next N create_index calls fail as if the
    server were unreachable.
    """

    def __init__(self, index_failures=0):
        self.docs = []
        self.indexes = []
        self.index_failures = index_failures

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def _unique_fields(self):
        return [keys[0][0] for keys, kwargs in self.indexes if kwargs.get("unique")]

    def find(self, query=None):
        query = query or {}
        return InMemoryCursor([d for d in self.docs if self._matches(d, query)])

    async def find_one(self, query):
        for d in self.docs:
            if self._matches(d, query):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, doc):
        for field in self._unique_fields():
            if any(d.get(field) == doc.get(field) for d in self.docs):
                raise DuplicateKeyError("E11000 duplicate key error", 11000)
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return InsertOneResult(doc["_id"], acknowledged=True)

    async def create_index(self, keys, **kwargs):
        if self.index_failures:
            self.index_failures -= 1
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        self.indexes.append((keys, kwargs))
        return kwargs.get("name", "index")


class InMemoryDatabase:
    def __init__(self, collection):
        self.collection = collection
        self.collection_names = []

    def __getitem__(self, name):
        self.collection_names.append(name)
        return self.collection


class InMemoryMongoClient:
    """Client double: every database/collection name resolves to one collection."""

    def __init__(self, collection):
        self.database = InMemoryDatabase(collection)
        self.database_names = []
        self.close_calls = 0

    def __getitem__(self, name):
        self.database_names.append(name)
        return self.database

    async def close(self):
        self.close_calls += 1


@pytest.fixture()
def credentials():
    return CredentialStore()


@pytest.fixture()
def tokens():
    return TokenService(secret=TEST_SECRET, default_ttl_minutes=30)


@pytest.fixture()
def collection():
    return InMemoryCollection()


@pytest.fixture()
def mongo_client(collection):
    return InMemoryMongoClient(collection)


@pytest.fixture()
def contacts(collection):
    return ContactRepository(collection)


@pytest_asyncio.fixture()
async def client(credentials, tokens, contacts):
    """HTTP client with the app's stores overridden for testing.

    Learn: Auth is NOT mocked — tests that need a token sign up and log
    in through the API (or issue one from the same TokenService).
    """
    app.dependency_overrides[get_credential_store] = lambda: credentials
    app.dependency_overrides[get_token_service] = lambda: tokens
    app.dependency_overrides[get_contact_repository] = lambda: contacts

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def auth_headers(client):
    """Sign up + log in a user and return bearer headers for them."""
    body = {"email": "owner@example.com", "password": "owner_pw"}
    await client.post("/signup", json=body)
    r = await client.post("/login", json=body)
    return {"Authorization": f"Bearer {r.json()['token']}"}

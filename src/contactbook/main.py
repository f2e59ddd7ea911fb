"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan owns the process-wide resources: the credential
store, the token service, and the single MongoDB client. They are
created once at startup, parked on app.state, and the Mongo client is
closed at shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contactbook import __version__
from contactbook.api import api_router
from contactbook.auth.jwt import TokenService
from contactbook.auth.store import CredentialStore
from contactbook.config import Settings, settings as default_settings
from contactbook.contacts.repository import ContactRepository
from contactbook.db import create_client, get_collection
from contactbook.errors import StoreError, register_error_handlers
from contactbook.log import configure_logging

logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown lifecycle.

        Learn: Anything before `yield` runs at startup, after `yield`
        runs at shutdown.
        """
        logger.info(
            "contactbook.starting",
            version=__version__,
            environment=settings.environment,
            host=settings.host,
            port=settings.port,
        )

        app.state.credentials = CredentialStore()
        app.state.tokens = TokenService.from_settings(settings)

        client = create_client(settings)
        app.state.mongo = client
        app.state.contacts = ContactRepository(get_collection(client, settings))
        try:
            await app.state.contacts.ensure_indexes()
            logger.info(
                "contactbook.mongo_ready",
                db=settings.db_name,
                collection=settings.collection,
            )
        except StoreError as e:
            # Mongo may come up after us; the first insert retries the index
            logger.warning("contactbook.mongo_unavailable", error=e.message)

        try:
            yield
        finally:
            logger.info("contactbook.shutdown")
            await client.close()

    app = FastAPI(
        title="Contactbook",
        description="Contacts API with JWT auth",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → CORS → handler

    from contactbook.middleware import RequestIdMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: contactbook.main:app)
app = create_app()

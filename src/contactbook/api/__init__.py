"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Routes sit at the root (no /api/v1 prefix) to match the
existing clients. Auth is applied per route with Depends(require_user)
because only some routes in the contacts router are protected.
"""

from fastapi import APIRouter

from contactbook.api.auth import router as auth_router
from contactbook.api.contacts import router as contacts_router
from contactbook.api.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(contacts_router, tags=["contacts"])

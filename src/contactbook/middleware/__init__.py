"""Starlette middleware: request IDs and access logging."""

from contactbook.middleware.request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]

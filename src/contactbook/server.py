"""Server entry point.

Usage:
    contactbook                      # listen on CONTACTBOOK_HOST:CONTACTBOOK_PORT
    python -m contactbook.server
"""

import uvicorn

from contactbook.config import settings


def main():
    """CLI entry point."""
    uvicorn.run(
        "contactbook.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

"""In-memory credential store: email → bcrypt digest.

Learn: Accounts live only for the life of the process. The store is an
explicitly owned object (created in the app lifespan, injected with
Depends) rather than a module-level dict, so tests get a fresh one and
a persistent backend can replace it behind the same put/get interface.
"""

from typing import Optional

import structlog

logger = structlog.get_logger()


class CredentialStore:
    """Maps email addresses to password digests."""

    def __init__(self):
        self._digests: dict[str, str] = {}

    def put(self, email: str, digest: str) -> None:
        """Insert or overwrite the digest for ``email`` (last write wins)."""
        self._digests[email] = digest
        logger.debug("credentials.put", email=email, users=len(self._digests))

    def add(self, email: str, digest: str) -> bool:
        """Insert only if ``email`` is unknown. Returns False if it already exists.

        Check and insert run without an await in between, so two
        concurrent signups for the same email cannot both win.
        """
        if email in self._digests:
            return False
        self._digests[email] = digest
        logger.debug("credentials.added", email=email, users=len(self._digests))
        return True

    def get(self, email: str) -> Optional[str]:
        """Return the digest for ``email``, or None if unknown."""
        return self._digests.get(email)

    def __contains__(self, email: object) -> bool:
        return email in self._digests

    def __len__(self) -> int:
        return len(self._digests)

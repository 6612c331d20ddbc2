"""
Credential stores implementing the CredentialStore interface.

The static store holds identifier/secret pairs loaded from configuration.
Any other backend (database, directory service) can replace it as long as
it exposes verify(identifier, secret).
"""

import logging
import secrets
from typing import Dict, Mapping

logger = logging.getLogger(__name__)


class StaticCredentialStore:
    """Credential store backed by an in-memory mapping of identifier to secret."""

    def __init__(self, credentials: Mapping[str, str]):
        """
        Initialize the store.

        Args:
            credentials: Mapping of identifier -> secret
        """
        self._credentials: Dict[str, str] = dict(credentials)
        if not self._credentials:
            logger.warning("Credential store is empty - every login will be rejected")

    def __len__(self) -> int:
        return len(self._credentials)

    def verify(self, identifier: str, secret: str) -> bool:
        """Check the pair using constant-time comparison of the secret."""
        if not identifier or secret is None:
            return False

        expected = self._credentials.get(identifier)
        if expected is None:
            return False

        return secrets.compare_digest(expected.encode("utf-8"), secret.encode("utf-8"))

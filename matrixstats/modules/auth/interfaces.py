"""Authentication interfaces following Black Box Design principles."""
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class CredentialStore(Protocol):
    """Protocol for credential lookup - allows swappable implementations."""

    def verify(self, identifier: str, secret: str) -> bool:
        """
        Check an identifier/secret pair.

        Args:
            identifier: Caller identifier (username)
            secret: Caller secret (password)

        Returns:
            True if the pair matches a configured credential
        """
        ...


@dataclass(frozen=True)
class IssuedToken:
    """A signed bearer token together with the claims it carries."""
    token: str
    subject: str
    issued_at: datetime
    expires_at: datetime


class TokenService(Protocol):
    """Protocol for token issuance and verification."""

    def issue(self, subject: str) -> IssuedToken:
        """Sign a new token for subject."""
        ...

    def verify(self, token: str) -> str:
        """
        Verify a bearer token.

        Returns:
            The subject identity carried by the token

        Raises:
            MissingToken, InvalidToken, ExpiredToken
        """
        ...

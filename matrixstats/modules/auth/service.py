"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- A clean interface for login and bearer verification
- Standardized authentication results
- Protocol definitions for swappable implementations
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..errors import InvalidCredentials, ServiceError
from .interfaces import CredentialStore, IssuedToken, TokenService
from .tokens import extract_bearer

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Standardized authentication result."""
    ok: bool
    identity: Optional[str]
    error: Optional[ServiceError] = None


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    async def login(self, identifier: str, secret: str) -> IssuedToken:
        """
        Exchange credentials for a bearer token.

        Raises:
            InvalidCredentials: the pair does not match
        """
        ...

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """
        Authenticate a request from its Authorization header.

        Args:
            authorization: Authorization header value

        Returns:
            AuthResult with authentication status and details
        """
        ...


class DefaultAuthenticationService:
    """
    Default implementation of AuthenticationService.

    This facade hides the credential store and token format from the API
    layer. Both collaborators are read-only after construction, so a single
    instance is shared by all requests.
    """

    def __init__(self, credential_store: CredentialStore, token_service: TokenService):
        """
        Initialize with injected collaborators.

        Args:
            credential_store: Any object with verify(identifier, secret)
            token_service: Any object with issue(subject) and verify(token)
        """
        self._credentials = credential_store
        self._tokens = token_service

    async def login(self, identifier: str, secret: str) -> IssuedToken:
        if not self._credentials.verify(identifier, secret):
            logger.info(f"Rejected login for {identifier!r}")
            raise InvalidCredentials()

        issued = self._tokens.issue(identifier)
        logger.info(f"Login succeeded for {identifier!r}")
        return issued

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        token = extract_bearer(authorization)

        try:
            identity = self._tokens.verify(token)
        except ServiceError as e:
            return AuthResult(ok=False, identity=None, error=e)

        return AuthResult(ok=True, identity=identity)

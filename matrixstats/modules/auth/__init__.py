"""
Authentication Module - Black Box Interface

Purpose: Check credentials, issue and verify bearer tokens
Interface: AuthFactory.build(), AuthenticationService.login(), AuthenticationService.authenticate()
Hidden: Credential storage, token format, signing algorithm

This module can be completely replaced with any other auth implementation
(OAuth, external identity provider) without affecting other modules.
"""

from .credentials import StaticCredentialStore
from .factory import AuthFactory
from .interfaces import CredentialStore, IssuedToken, TokenService
from .service import AuthenticationService, AuthResult, DefaultAuthenticationService
from .tokens import JWTTokenService, extract_bearer

__all__ = [
    "AuthFactory",
    "AuthenticationService",
    "AuthResult",
    "CredentialStore",
    "DefaultAuthenticationService",
    "IssuedToken",
    "JWTTokenService",
    "StaticCredentialStore",
    "TokenService",
    "extract_bearer",
]

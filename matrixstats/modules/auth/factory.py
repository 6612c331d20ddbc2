"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging
from datetime import timedelta
from typing import Callable, Mapping, Optional

from ...config.provider import ConfigProvider
from .credentials import StaticCredentialStore
from .service import AuthenticationService, DefaultAuthenticationService
from .tokens import JWTTokenService

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(config_provider: ConfigProvider) -> AuthenticationService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider

        Returns:
            AuthenticationService facade (hides all implementation details)
        """
        auth_config = config_provider.get_auth_config()

        credential_store = StaticCredentialStore(auth_config.credentials)
        token_service = JWTTokenService(
            secret=auth_config.jwt_secret,
            algorithm=auth_config.algorithm,
            ttl=timedelta(hours=auth_config.token_ttl_hours),
        )

        logger.info(
            f"Building authentication stack with {len(credential_store)} credential(s), "
            f"{auth_config.algorithm} tokens valid for {auth_config.token_ttl_hours}h"
        )

        return DefaultAuthenticationService(credential_store, token_service)

    @staticmethod
    def build_for_testing(
        credentials: Optional[Mapping[str, str]] = None,
        secret: str = "test-signing-secret-with-enough-length",
        clock: Optional[Callable[[], float]] = None,
    ) -> AuthenticationService:
        """
        Build auth stack for testing with fixed credentials and an optional clock.

        Args:
            credentials: identifier -> secret mapping (defaults to demo/demo)
            secret: Signing secret
            clock: Callable returning the current UNIX time

        Returns:
            AuthenticationService for testing
        """
        if credentials is None:
            credentials = {"demo": "demo"}

        return DefaultAuthenticationService(
            StaticCredentialStore(credentials),
            JWTTokenService(secret=secret, clock=clock),
        )

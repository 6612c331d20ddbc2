"""
JWT token service implementing the TokenService interface.

This module follows Black Box Design principles:
- Signing key and lifetime are injected, never read from the environment
- Tokens are stateless: verification needs only the signing key
- The clock is injectable so expiry boundaries can be tested
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..errors import ExpiredToken, InvalidToken, MissingToken
from .interfaces import IssuedToken

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=24)


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token part of an Authorization header.

    Args:
        authorization: Raw header value, e.g. "Bearer eyJ..."

    Returns:
        The token, or None if the header is absent or has no token part
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) < 2:
        return None
    return parts[1]


class JWTTokenService:
    """
    Issues and verifies HMAC-signed JWTs.

    Claims carried: sub and username (the authenticated identifier),
    iat (issuance) and exp (issuance + ttl), both in whole seconds.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the token service.

        Args:
            secret: Shared signing secret
            algorithm: HMAC algorithm name understood by PyJWT
            ttl: Token lifetime measured from issuance
            clock: Callable returning the current UNIX time (defaults to time.time)
        """
        if not secret:
            raise ValueError("A signing secret is required")

        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock or time.time

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject: str) -> IssuedToken:
        """
        Sign a new token for subject.

        Args:
            subject: Authenticated identifier

        Returns:
            IssuedToken with the encoded JWT and its validity window
        """
        issued_at = int(self._clock())
        expires_at = issued_at + int(self._ttl.total_seconds())

        claims = {
            "sub": subject,
            "username": subject,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)

        logger.debug(f"Issued token for {subject} expiring at {expires_at}")

        return IssuedToken(
            token=token,
            subject=subject,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )

    def verify(self, token: Optional[str]) -> str:
        """
        Verify a token and return its subject.

        Args:
            token: Encoded JWT (without the "Bearer " prefix)

        Returns:
            Subject identity

        Raises:
            MissingToken: no token given
            InvalidToken: bad signature, malformed token or missing subject
            ExpiredToken: current time is at or past the exp claim
        """
        if not token:
            raise MissingToken()

        try:
            # Time claims are checked below against the injected clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_signature": True,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": ["exp"],
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid JWT token: {e}")
            raise InvalidToken() from e

        expires_at = claims.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            logger.debug("JWT exp claim is not numeric")
            raise InvalidToken()

        if self._clock() >= expires_at:
            logger.debug("JWT token expired")
            raise ExpiredToken()

        subject = claims.get("sub") or claims.get("username")
        if not isinstance(subject, str) or not subject:
            logger.debug("JWT token carries no subject")
            raise InvalidToken()

        return subject

"""Configuration provider following Black Box Design principles."""
import logging
import os
import secrets
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS = "demo:demo"


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str
    cors_origins: List[str]
    service_name: str = "Matrixstats API"


@dataclass
class AuthConfig:
    """Authentication configuration."""
    jwt_secret: str
    token_ttl_hours: int
    algorithm: str
    credentials: Dict[str, str] = field(default_factory=dict)


@dataclass
class ClientConfig:
    """Configuration for peer services calling the stats API."""
    stats_api_url: str
    timeout_seconds: float


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_client_config(self) -> ClientConfig:
        """Get peer client configuration."""
        ...


def parse_credentials(raw: str) -> Dict[str, str]:
    """
    Parse a credential list of the form "user:secret,user2:secret2".

    Entries without a separator or with an empty identifier are skipped.
    The secret may itself contain colons.
    """
    credentials = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry or ":" not in entry:
            continue

        identifier, secret = entry.split(":", 1)
        identifier = identifier.strip()
        if not identifier:
            continue
        credentials[identifier] = secret

    return credentials


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self):
        self._generated_secret: Optional[str] = None

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "3000")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            # Tokens issued with a generated secret do not survive a restart
            if self._generated_secret is None:
                logger.warning(
                    "JWT_SECRET is not set; generating a per-process signing secret"
                )
                self._generated_secret = secrets.token_urlsafe(32)
            jwt_secret = self._generated_secret

        return AuthConfig(
            jwt_secret=jwt_secret,
            token_ttl_hours=int(os.getenv("TOKEN_TTL_HOURS", "24")),
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            credentials=parse_credentials(
                os.getenv("AUTH_CREDENTIALS", DEFAULT_CREDENTIALS)
            ),
        )

    def get_client_config(self) -> ClientConfig:
        """Get peer client configuration from environment variables."""
        return ClientConfig(
            stats_api_url=os.getenv("STATS_API_URL", "http://localhost:3000").rstrip("/"),
            timeout_seconds=float(os.getenv("STATS_API_TIMEOUT", "30")),
        )

"""
Unit tests for the authentication service facade, credential store and factory.
"""

import os
from unittest.mock import MagicMock, patch

import pytest

from matrixstats.config.provider import EnvConfigProvider
from matrixstats.modules.auth import (
    AuthFactory,
    DefaultAuthenticationService,
    StaticCredentialStore,
)
from matrixstats.modules.errors import ExpiredToken, InvalidCredentials, InvalidToken, MissingToken


def test_static_store_verifies_exact_pair():
    """Test that only the exact identifier/secret pair matches."""
    store = StaticCredentialStore({"demo": "demo"})

    assert store.verify("demo", "demo") is True
    assert store.verify("demo", "Demo") is False
    assert store.verify("Demo", "demo") is False
    assert store.verify("demo", "") is False
    assert store.verify("", "demo") is False
    assert store.verify("someone", "demo") is False


def test_empty_store_rejects_everything():
    """Test that an empty store rejects all logins."""
    store = StaticCredentialStore({})

    assert len(store) == 0
    assert store.verify("demo", "demo") is False


@pytest.mark.asyncio
async def test_login_success(auth_service):
    """Test that valid credentials yield a verifiable token."""
    issued = await auth_service.login("alice", "wonderland")

    assert issued.subject == "alice"
    result = await auth_service.authenticate(f"Bearer {issued.token}")
    assert result.ok is True
    assert result.identity == "alice"
    assert result.error is None


@pytest.mark.asyncio
async def test_login_invalid_credentials(auth_service):
    """Test that a wrong secret raises InvalidCredentials."""
    with pytest.raises(InvalidCredentials):
        await auth_service.login("alice", "demo")


@pytest.mark.asyncio
async def test_login_does_not_issue_on_failure():
    """Test that no token is signed when the credential check fails."""
    store = MagicMock()
    store.verify.return_value = False
    tokens = MagicMock()
    service = DefaultAuthenticationService(store, tokens)

    with pytest.raises(InvalidCredentials):
        await service.login("demo", "nope")

    store.verify.assert_called_once_with("demo", "nope")
    tokens.issue.assert_not_called()


@pytest.mark.asyncio
async def test_authenticate_missing_header(auth_service):
    """Test authentication without an Authorization header."""
    result = await auth_service.authenticate(None)

    assert result.ok is False
    assert result.identity is None
    assert isinstance(result.error, MissingToken)


@pytest.mark.asyncio
async def test_authenticate_invalid_token(auth_service):
    """Test authentication with a garbage token."""
    result = await auth_service.authenticate("Bearer not-a-jwt")

    assert result.ok is False
    assert isinstance(result.error, InvalidToken)


@pytest.mark.asyncio
async def test_authenticate_expired_token(auth_service, clock):
    """Test authentication with a token past its expiry."""
    issued = await auth_service.login("demo", "demo")
    clock.advance(24 * 60 * 60)

    result = await auth_service.authenticate(f"Bearer {issued.token}")

    assert result.ok is False
    assert isinstance(result.error, ExpiredToken)


@pytest.mark.asyncio
async def test_factory_builds_from_environment():
    """Test the full stack built from environment configuration."""
    env = {
        "JWT_SECRET": "environment-secret-long-enough-for-hs256",
        "AUTH_CREDENTIALS": "ops:s3cret,reader:pa:ss",
        "TOKEN_TTL_HOURS": "1",
    }
    with patch.dict(os.environ, env, clear=False):
        service = AuthFactory.build(EnvConfigProvider())

    issued = await service.login("reader", "pa:ss")
    assert (issued.expires_at - issued.issued_at).total_seconds() == 3600

    result = await service.authenticate(f"Bearer {issued.token}")
    assert result.identity == "reader"

    with pytest.raises(InvalidCredentials):
        await service.login("demo", "demo")


@pytest.mark.asyncio
async def test_factory_default_demo_credentials():
    """Test that the demo pair is accepted when no credentials are configured."""
    with patch.dict(os.environ, {}, clear=True):
        service = AuthFactory.build(EnvConfigProvider())

    issued = await service.login("demo", "demo")
    assert issued.subject == "demo"

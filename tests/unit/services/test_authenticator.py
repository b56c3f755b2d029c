# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the Authenticator.

The handler is a MagicMock(spec=VaultHandler) so login calls can be asserted
on directly; the token cache is a real TokenCache in ``tmp_path``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from vault_inject.enums import EnumAuthMethod, EnumExitCode
from vault_inject.errors import (
    AuthInvalidCredentialsError,
    AuthMalformedResponseError,
    AuthServiceUnreachableError,
    VaultForbiddenError,
    VaultInvalidPathError,
    VaultInvalidRequestError,
    VaultTransportError,
)
from vault_inject.models import (
    ModelCacheEntry,
    ModelCachePolicy,
    ModelLdapCredentials,
    ModelTokenCredentials,
    ModelUserPassCredentials,
)
from vault_inject.protocols import ProtocolCredentialSource, StaticCredentialSource
from vault_inject.services import Authenticator, TokenCache, build_credentials

VAULT_URL = "https://vault.example.com:8200"
LOGIN_RESPONSE = {"auth": {"client_token": "s.fresh", "lease_duration": 3600}}


class RecordingSource:
    """Credential source that records which values were asked for."""

    def __init__(self, principal: str = "alice", secret: str = "hunter2") -> None:
        self.principal = principal
        self.secret = secret
        self.asked: list[str] = []

    def get_principal(self) -> str:
        self.asked.append("principal")
        return self.principal

    def get_secret_credential(self) -> SecretStr:
        self.asked.append("secret")
        return SecretStr(self.secret)


def _cached(
    token: str = "s.cached",
    expires_in: timedelta | None = None,
    principal: str = "alice",
) -> ModelCacheEntry:
    return ModelCacheEntry(
        service_url=VAULT_URL,
        auth_method=EnumAuthMethod.USERPASS,
        principal=principal,
        token=SecretStr(token),
        expires_at=datetime.now(UTC) + expires_in if expires_in else None,
    )


@pytest.fixture
def token_cache(tmp_path: Path) -> TokenCache:
    return TokenCache(tmp_path / "cache.json")


@pytest.fixture
def login_handler(mock_handler: MagicMock) -> MagicMock:
    mock_handler.login_userpass.return_value = LOGIN_RESPONSE
    mock_handler.login_ldap.return_value = LOGIN_RESPONSE
    return mock_handler


class TestAuthenticatorLogin:
    """Test fresh logins."""

    def test_recording_source_satisfies_protocol(self) -> None:
        assert isinstance(RecordingSource(), ProtocolCredentialSource)

    @pytest.mark.asyncio
    async def test_userpass_login(self, login_handler: MagicMock) -> None:
        authenticator = Authenticator(login_handler)

        session = await authenticator.authenticate(
            EnumAuthMethod.USERPASS,
            StaticCredentialSource("alice", "hunter2"),
            ModelCachePolicy(read=False, write=False),
        )

        assert session.token.get_secret_value() == "s.fresh"
        assert session.method is EnumAuthMethod.USERPASS
        assert session.principal == "alice"
        assert session.from_cache is False
        assert session.expires_at is not None
        assert session.expires_at > datetime.now(UTC) + timedelta(minutes=59)
        args = login_handler.login_userpass.call_args.args
        assert args[0] == "alice"
        assert args[1].get_secret_value() == "hunter2"
        assert args[2] == "userpass"

    @pytest.mark.asyncio
    async def test_ldap_login_with_custom_mount(
        self, login_handler: MagicMock
    ) -> None:
        authenticator = Authenticator(login_handler)

        await authenticator.authenticate(
            EnumAuthMethod.LDAP,
            StaticCredentialSource("alice", "hunter2"),
            ModelCachePolicy(read=False, write=False),
            auth_mount="auth/ldap-corp",
        )

        assert login_handler.login_ldap.call_args.args[2] == "ldap-corp"
        login_handler.login_userpass.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_lease_never_expires(self, login_handler: MagicMock) -> None:
        login_handler.login_userpass.return_value = {
            "auth": {"client_token": "s.root", "lease_duration": 0}
        }

        session = await Authenticator(login_handler).authenticate(
            EnumAuthMethod.USERPASS,
            StaticCredentialSource("alice", "pw"),
            ModelCachePolicy(read=False, write=False),
        )

        assert session.expires_at is None

    @pytest.mark.asyncio
    async def test_token_auth_skips_login_and_cache(
        self, mock_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        source = RecordingSource(secret="s.static")

        session = await Authenticator(mock_handler, token_cache).authenticate(
            EnumAuthMethod.TOKEN, source, ModelCachePolicy()
        )

        assert session.token.get_secret_value() == "s.static"
        assert session.expires_at is None
        assert source.asked == ["secret"]
        mock_handler.login_userpass.assert_not_called()
        assert not token_cache.path.exists()

    @pytest.mark.asyncio
    async def test_empty_username_rejected(self, mock_handler: MagicMock) -> None:
        with pytest.raises(AuthInvalidCredentialsError):
            await Authenticator(mock_handler).authenticate(
                EnumAuthMethod.USERPASS,
                StaticCredentialSource("", "pw"),
                ModelCachePolicy(read=False, write=False),
            )
        mock_handler.login_userpass.assert_not_called()

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            (EnumAuthMethod.USERPASS, ModelUserPassCredentials),
            (EnumAuthMethod.LDAP, ModelLdapCredentials),
            (EnumAuthMethod.TOKEN, ModelTokenCredentials),
        ],
    )
    def test_build_credentials_variant(
        self, method: EnumAuthMethod, expected: type[object]
    ) -> None:
        credentials = build_credentials(method, "alice", SecretStr("secret"))

        assert isinstance(credentials, expected)
        assert credentials.method is method

    @pytest.mark.asyncio
    async def test_login_with_token_variant(
        self, mock_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        session = await Authenticator(mock_handler, token_cache).login(
            ModelTokenCredentials(token=SecretStr("s.static")), ModelCachePolicy()
        )

        assert session.method is EnumAuthMethod.TOKEN
        assert session.token.get_secret_value() == "s.static"
        mock_handler.login_userpass.assert_not_called()
        mock_handler.login_ldap.assert_not_called()
        assert not token_cache.path.exists()


class TestAuthenticatorErrors:
    """Test translation of handler errors into auth errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("raised", "expected"),
        [
            (
                VaultInvalidRequestError("invalid username or password"),
                AuthInvalidCredentialsError,
            ),
            (VaultForbiddenError("permission denied"), AuthInvalidCredentialsError),
            (VaultInvalidPathError("no handler"), AuthInvalidCredentialsError),
            (VaultTransportError("connection refused"), AuthServiceUnreachableError),
        ],
    )
    async def test_login_errors(
        self,
        mock_handler: MagicMock,
        raised: Exception,
        expected: type[Exception],
    ) -> None:
        mock_handler.login_userpass.side_effect = raised

        with pytest.raises(expected) as exc_info:
            await Authenticator(mock_handler).authenticate(
                EnumAuthMethod.USERPASS,
                StaticCredentialSource("alice", "hunter2"),
                ModelCachePolicy(read=False, write=False),
            )

        assert exc_info.value.exit_code == EnumExitCode.AUTH
        assert exc_info.value.__cause__ is raised
        assert "hunter2" not in exc_info.value.describe()

    @pytest.mark.asyncio
    async def test_missing_mount_mentions_auth_path(
        self, mock_handler: MagicMock
    ) -> None:
        mock_handler.login_ldap.side_effect = VaultInvalidPathError("not found")

        with pytest.raises(AuthInvalidCredentialsError, match="--auth-path"):
            await Authenticator(mock_handler).authenticate(
                EnumAuthMethod.LDAP,
                StaticCredentialSource("alice", "pw"),
                ModelCachePolicy(read=False, write=False),
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            {},
            {"auth": None},
            {"auth": {"lease_duration": 10}},
            {"auth": {"client_token": ""}},
        ],
    )
    async def test_malformed_response(
        self, mock_handler: MagicMock, response: dict[str, object]
    ) -> None:
        mock_handler.login_userpass.return_value = response

        with pytest.raises(AuthMalformedResponseError):
            await Authenticator(mock_handler).authenticate(
                EnumAuthMethod.USERPASS,
                StaticCredentialSource("alice", "pw"),
                ModelCachePolicy(read=False, write=False),
            )


class TestAuthenticatorCache:
    """Test token cache read/write gating."""

    @pytest.mark.asyncio
    async def test_cached_token_skips_login_and_password(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        token_cache.put(_cached(expires_in=timedelta(hours=1)))
        source = RecordingSource()

        session = await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS, source, ModelCachePolicy()
        )

        assert session.from_cache is True
        assert session.token.get_secret_value() == "s.cached"
        assert source.asked == ["principal"]
        login_handler.login_userpass.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_expiring_cached_token_is_used(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        token_cache.put(_cached())

        session = await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS, RecordingSource(), ModelCachePolicy()
        )

        assert session.from_cache is True

    @pytest.mark.asyncio
    async def test_expired_cached_token_forces_login(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        token_cache.put(_cached(expires_in=timedelta(seconds=-1)))

        session = await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS, RecordingSource(), ModelCachePolicy()
        )

        assert session.from_cache is False
        assert session.token.get_secret_value() == "s.fresh"
        login_handler.login_userpass.assert_called_once()

    @pytest.mark.asyncio
    async def test_read_disabled_ignores_valid_entry(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        token_cache.put(_cached(expires_in=timedelta(hours=1)))

        session = await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS,
            RecordingSource(),
            ModelCachePolicy(read=False, write=True),
        )

        assert session.from_cache is False
        login_handler.login_userpass.assert_called_once()

    @pytest.mark.asyncio
    async def test_read_disabled_keeps_other_entries(
        self, login_handler: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "cache.json"
        seeded = TokenCache(path)
        seeded.put(_cached(token="s.bob", principal="bob"))
        seeded.save()

        await Authenticator(login_handler, TokenCache(path)).authenticate(
            EnumAuthMethod.USERPASS,
            RecordingSource(),
            ModelCachePolicy(read=False, write=True),
        )

        reloaded = TokenCache(path)
        bob = reloaded.get(VAULT_URL, EnumAuthMethod.USERPASS, "bob")
        alice = reloaded.get(VAULT_URL, EnumAuthMethod.USERPASS, "alice")
        assert bob is not None
        assert bob.token.get_secret_value() == "s.bob"
        assert alice is not None
        assert alice.token.get_secret_value() == "s.fresh"

    @pytest.mark.asyncio
    async def test_login_writes_cache(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS, RecordingSource(), ModelCachePolicy()
        )

        reloaded = TokenCache(token_cache.path)
        entry = reloaded.get(VAULT_URL, EnumAuthMethod.USERPASS, "alice")
        assert entry is not None
        assert entry.token.get_secret_value() == "s.fresh"

    @pytest.mark.asyncio
    async def test_write_disabled_leaves_cache_untouched(
        self, login_handler: MagicMock, token_cache: TokenCache
    ) -> None:
        await Authenticator(login_handler, token_cache).authenticate(
            EnumAuthMethod.USERPASS,
            RecordingSource(),
            ModelCachePolicy(read=True, write=False),
        )

        assert not token_cache.path.exists()

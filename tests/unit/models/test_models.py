# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for vault-inject pydantic models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import SecretStr, TypeAdapter, ValidationError

from vault_inject.enums import EnumAuthMethod, EnumEngineKind
from vault_inject.models import (
    AuthCredentials,
    ModelCacheEntry,
    ModelEnvironmentMap,
    ModelLdapCredentials,
    ModelMountPoint,
    ModelMountTable,
    ModelResolvedSecret,
    ModelTokenCredentials,
    ModelUserPassCredentials,
    ModelVaultClientConfig,
)


def _secret(name: str, value: str, index: int) -> ModelResolvedSecret:
    return ModelResolvedSecret(
        env_name=name,
        raw_value=SecretStr(value),
        final_value=SecretStr(value),
        origin_path=f"secret/doc/{name.lower()}",
        discovery_index=index,
    )


class TestMountTable:
    """Test longest-prefix mount lookup."""

    @pytest.fixture
    def table(self) -> ModelMountTable:
        return ModelMountTable(
            mounts=(
                ModelMountPoint(path_prefix="secret", engine_kind=EnumEngineKind.KV2),
                ModelMountPoint(
                    path_prefix="secret/team", engine_kind=EnumEngineKind.KV2
                ),
                ModelMountPoint(
                    path_prefix="cubbyhole", engine_kind=EnumEngineKind.CUBBYHOLE
                ),
            )
        )

    def test_resolve_picks_longest_prefix(self, table: ModelMountTable) -> None:
        resolved = table.resolve("secret/team/db")

        assert resolved is not None
        mount, remainder = resolved
        assert mount.path_prefix == "secret/team"
        assert remainder == "db"

    def test_resolve_shorter_prefix(self, table: ModelMountTable) -> None:
        resolved = table.resolve("/secret/foo/bar/")

        assert resolved is not None
        mount, remainder = resolved
        assert mount.path_prefix == "secret"
        assert remainder == "foo/bar"

    def test_resolve_respects_segment_boundaries(
        self, table: ModelMountTable
    ) -> None:
        resolved = table.resolve("secret/teamwork/db")

        assert resolved is not None
        assert resolved[0].path_prefix == "secret"
        assert table.resolve("secrets/foo") is None

    def test_resolve_unknown_mount(self, table: ModelMountTable) -> None:
        assert table.resolve("transit/keys") is None


class TestEngineKind:
    """Test mount type classification."""

    @pytest.mark.parametrize(
        ("mount_type", "options", "expected"),
        [
            ("kv", {"version": "2"}, EnumEngineKind.KV2),
            ("kv", {"version": 2}, EnumEngineKind.KV2),
            ("kv", {"version": "1"}, None),
            ("kv", None, None),
            ("cubbyhole", None, EnumEngineKind.CUBBYHOLE),
            ("transit", None, None),
        ],
    )
    def test_classify(
        self,
        mount_type: str,
        options: dict[str, object] | None,
        expected: EnumEngineKind | None,
    ) -> None:
        assert EnumEngineKind.classify(mount_type, options) is expected


class TestAuthMethod:
    """Test auth type parsing."""

    @pytest.mark.parametrize(
        "value",
        ["userpass", "user-pass", "username-password", "username", "user", "USER"],
    )
    def test_userpass_aliases(self, value: str) -> None:
        assert EnumAuthMethod.parse(value) is EnumAuthMethod.USERPASS

    def test_ldap_and_token(self) -> None:
        assert EnumAuthMethod.parse("ldap") is EnumAuthMethod.LDAP
        assert EnumAuthMethod.parse(" token ") is EnumAuthMethod.TOKEN

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="not a valid authentication type"):
            EnumAuthMethod.parse("kerberos")


class TestAuthCredentials:
    """Test the credential variants."""

    @pytest.mark.parametrize(
        ("mount", "expected"),
        [
            (None, "ldap"),
            ("ldap-corp", "ldap-corp"),
            ("/auth/ldap-corp/", "ldap-corp"),
            ("auth/ldap-corp", "ldap-corp"),
        ],
    )
    def test_auth_mount_normalized(self, mount: str | None, expected: str) -> None:
        credentials = ModelLdapCredentials(
            username="alice", password=SecretStr("pw"), mount=mount
        )

        assert credentials.auth_mount == expected
        assert credentials.principal == "alice"

    def test_discriminated_union(self) -> None:
        adapter = TypeAdapter(AuthCredentials)

        userpass = adapter.validate_python(
            {"method": "userpass", "username": "bob", "password": "pw"}
        )
        token = adapter.validate_python({"method": "token", "token": "s.abc"})

        assert isinstance(userpass, ModelUserPassCredentials)
        assert isinstance(token, ModelTokenCredentials)
        assert token.principal == ""

    def test_password_not_in_repr(self) -> None:
        credentials = ModelUserPassCredentials(
            username="bob", password=SecretStr("hunter2")
        )

        assert "hunter2" not in repr(credentials)

    def test_empty_username_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelUserPassCredentials(username="", password=SecretStr("pw"))


class TestCacheEntry:
    """Test cache entry expiry and serialization."""

    def _entry(self, expires_at: datetime | None) -> ModelCacheEntry:
        return ModelCacheEntry(
            service_url="https://vault.example.com:8200",
            auth_method=EnumAuthMethod.USERPASS,
            principal="alice",
            token=SecretStr("s.cached"),
            expires_at=expires_at,
        )

    def test_no_expiry_never_expires(self) -> None:
        assert self._entry(None).is_expired() is False

    def test_expired(self) -> None:
        now = datetime.now(UTC)

        assert self._entry(now - timedelta(seconds=1)).is_expired(now) is True
        assert self._entry(now).is_expired(now) is True
        assert self._entry(now + timedelta(hours=1)).is_expired(now) is False

    def test_naive_expiry_treated_as_utc(self) -> None:
        now = datetime.now(UTC)
        naive = (now + timedelta(hours=1)).replace(tzinfo=None)

        assert self._entry(naive).is_expired(now) is False

    def test_json_dump_contains_clear_token(self) -> None:
        entry = self._entry(None)

        assert '"s.cached"' in entry.model_dump_json()
        assert "s.cached" not in repr(entry)


class TestEnvironmentMap:
    """Test the ordered result map."""

    def test_as_env_keeps_discovery_order(self) -> None:
        env_map = ModelEnvironmentMap(
            secrets=(_secret("B", "2", 0), _secret("A", "1", 1))
        )

        assert list(env_map.as_env().items()) == [("B", "2"), ("A", "1")]
        assert env_map.names == ["B", "A"]

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelEnvironmentMap(secrets=(_secret("X", "1", 0), _secret("X", "2", 1)))

    def test_empty_map(self) -> None:
        assert ModelEnvironmentMap().as_env() == {}


class TestVaultClientConfig:
    """Test connection settings validation."""

    def test_defaults(self) -> None:
        config = ModelVaultClientConfig(url="https://vault.example.com:8200/")

        assert config.url == "https://vault.example.com:8200"
        assert config.timeout_seconds == 30.0
        assert config.verify_ssl is True
        assert config.max_concurrent_operations == 10

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"url": "vault.example.com"},
            {"url": "https://vault.example.com", "timeout_seconds": 0.5},
            {"url": "https://vault.example.com", "timeout_seconds": 301},
            {"url": "https://vault.example.com", "max_concurrent_operations": 0},
            {"url": "https://vault.example.com", "token": "s.nope"},
        ],
    )
    def test_invalid(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            ModelVaultClientConfig(**kwargs)
